"""Schemas shared by several domains"""

from typing import Optional

from pydantic import BaseModel

from .models import User


class MessageResponse(BaseModel):
    message: str


class UserSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: str


def user_summary(user: Optional[User]) -> Optional[UserSummary]:
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name, email=user.email)
