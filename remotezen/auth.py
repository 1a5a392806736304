import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .errors import AuthenticationError, AuthorizationError
from .models import User
from .security_utils import verify_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _resolve_user(token: str, db: Session) -> Optional[User]:
    # Basic token format validation before processing
    if len(token.split(".")) != 3:
        logger.warning(f"⚠️ Malformed token received, token length: {len(token)}")
        return None

    payload = verify_access_token(token)
    if not payload or not payload.get("sub"):
        return None

    return db.query(User).filter(User.id == payload["sub"]).first()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer token"""
    if not credentials or not credentials.credentials:
        raise AuthenticationError(
            "Not authenticated. Please provide a valid Bearer token in the Authorization header."
        )

    user = _resolve_user(credentials.credentials, db)
    if not user:
        raise AuthenticationError("Unauthorized")

    logger.debug(f"✅ User authenticated: {user.email}")
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like get_current_user, but anonymous or invalid tokens yield None"""
    if not credentials or not credentials.credentials:
        return None
    return _resolve_user(credentials.credentials, db)


def get_current_admin(user: User = Depends(get_current_user)) -> User:
    """Require the global ADMIN role"""
    if user.role != "ADMIN":
        logger.warning(f"⚠️ User {user.email} attempted to access an admin route")
        raise AuthorizationError("Admin access required")
    return user
