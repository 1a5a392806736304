"""Account repository - Database operations for users"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

    @staticmethod
    def create_user(db: Session, name: str, email: str, password_hash: Optional[str]) -> User:
        """Add a credentials user and flush; the caller owns the transaction"""
        user = User(name=name, email=email.lower(), password_hash=password_hash, auth_provider="credentials")
        db.add(user)
        db.flush()
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        for key, value in updates.items():
            setattr(user, key, value)
        db.commit()
        db.refresh(user)
        return user
