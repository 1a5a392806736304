"""Account schemas - registration, login and profile payloads"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import clean_optional_text, validate_email, validate_required_text

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 72  # bcrypt ignores anything past 72 bytes


def _validate_password(v: str) -> str:
    if len(v) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(v.encode("utf-8")) > MAX_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_LENGTH} bytes")
    return v


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return validate_required_text(v, "Name")

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(validate_required_text(v, "Email"))

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return _validate_password(v)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return clean_optional_text(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if v is None:
            return v
        return _validate_password(v)


class CheckEmailRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return validate_required_text(v, "Email").lower()


class UserResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    role: str
    authProvider: str


class TeamRoleResponse(BaseModel):
    id: str
    name: str
    role: str


class AuthResponse(BaseModel):
    user: UserResponse
    teams: list[TeamRoleResponse] = []
    token: str


class MeResponse(BaseModel):
    user: UserResponse
    teams: list[TeamRoleResponse] = []


class ProfileResponse(BaseModel):
    user: UserResponse


class CheckEmailResponse(BaseModel):
    exists: bool
