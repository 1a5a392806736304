"""Account service - registration, login and profile management"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import AuthenticationError, ConflictError
from ...models import User
from ...security_utils import create_access_token, hash_password, verify_password
from ..invites.service import InvitationService
from ..teams.repository import TeamRepository
from .repository import UserRepository
from .schemas import LoginRequest, ProfileUpdate, RegisterRequest

logger = logging.getLogger(__name__)


class AccountService:
    """Service layer for account business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()
        self.teams = TeamRepository()

    def register(self, data: RegisterRequest) -> tuple[User, str]:
        """
        Create a credentials account.

        The user, their personal team (with the user as MANAGER) and the
        acceptance of any pending invitations commit together or not at all.
        """
        if self.repo.get_by_email(self.db, data.email):
            raise ConflictError("User with this email already exists")

        try:
            user = self.repo.create_user(self.db, data.name, data.email, hash_password(data.password))
            self.teams.create_team(self.db, f"{data.name}'s Team", user.id, owner_role="MANAGER", commit=False)
            InvitationService(self.db).accept_pending_for(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Registration conflict for {data.email}: {e}")
            raise ConflictError("User with this email already exists") from e

        self.db.refresh(user)
        logger.info(f"🆕 User registered: {user.email} ({user.id})")
        return user, create_access_token(user.id, user.email)

    def login(self, data: LoginRequest) -> tuple[User, str]:
        user = self.repo.get_by_email(self.db, data.email)
        if not user or not verify_password(data.password, user.password_hash):
            logger.warning(f"🔒 Failed login attempt for {data.email}")
            raise AuthenticationError("Invalid credentials")

        logger.info(f"🔓 User logged in: {user.email}")
        return user, create_access_token(user.id, user.email)

    def team_roles(self, user: User) -> list[dict]:
        """Teams the user belongs to, with the user's role in each"""
        return [
            {"id": m.team.id, "name": m.team.name, "role": m.role}
            for m in self.teams.get_memberships_for_user(self.db, user.id)
        ]

    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        updates = {}
        if data.name is not None:
            updates["name"] = data.name
        if data.password is not None:
            updates["password_hash"] = hash_password(data.password)

        if not updates:
            return user

        user = self.repo.update_user(self.db, user, **updates)
        logger.info(f"✏️ Profile updated for {user.id}: {', '.join(sorted(updates))}")
        return user

    def email_exists(self, email: str) -> bool:
        return self.repo.get_by_email(self.db, email) is not None
