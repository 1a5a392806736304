"""Account routers - /auth for sign-up and sign-in, /users for the profile"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from .schemas import (
    AuthResponse,
    CheckEmailRequest,
    CheckEmailResponse,
    LoginRequest,
    MeResponse,
    ProfileResponse,
    ProfileUpdate,
    RegisterRequest,
    UserResponse,
)
from .service import AccountService

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["Authentication"])
users_router = APIRouter(prefix="/users", tags=["Users"])

# Rate limiters
rate_limit_register = create_rate_limiter(limit=10, window_seconds=3600, key_prefix="register", use_ip=True)
rate_limit_login = create_rate_limiter(limit=20, window_seconds=300, key_prefix="login", use_ip=True)
rate_limit_check_email = create_rate_limiter(limit=30, window_seconds=60, key_prefix="check_email", use_ip=True)


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    """Dependency injection for AccountService"""
    return AccountService(db)


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        authProvider=user.auth_provider,
    )


# ============================================================================
# AUTHENTICATION
# ============================================================================


@auth_router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    data: RegisterRequest,
    _: None = Depends(rate_limit_register),
    service: AccountService = Depends(get_account_service),
):
    """Create an account with a personal team and return an access token"""
    user, token = service.register(data)
    return AuthResponse(user=user_response(user), teams=service.team_roles(user), token=token)


@auth_router.post("/login", response_model=AuthResponse)
def login(
    data: LoginRequest,
    _: None = Depends(rate_limit_login),
    service: AccountService = Depends(get_account_service),
):
    user, token = service.login(data)
    return AuthResponse(user=user_response(user), teams=service.team_roles(user), token=token)


@auth_router.get("/me", response_model=MeResponse)
def get_me(
    current_user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    """Current user with their teams and team roles"""
    return MeResponse(user=user_response(current_user), teams=service.team_roles(current_user))


# ============================================================================
# PROFILE
# ============================================================================


@users_router.patch("/me", response_model=ProfileResponse)
def update_me(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    return ProfileResponse(user=user_response(service.update_profile(current_user, data)))


@users_router.post("/check", response_model=CheckEmailResponse)
def check_email(
    data: CheckEmailRequest,
    _: None = Depends(rate_limit_check_email),
    service: AccountService = Depends(get_account_service),
):
    """Whether an account exists for an email"""
    return CheckEmailResponse(exists=service.email_exists(data.email))
