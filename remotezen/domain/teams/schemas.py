"""Team domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...schemas import UserSummary
from ...shared.validators import validate_required_text


class TeamCreate(BaseModel):
    """Schema for creating a new team"""

    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return validate_required_text(v, "Team name")


class MemberResponse(BaseModel):
    id: str
    role: str
    joinedAt: datetime
    user: UserSummary


class TeamResponse(BaseModel):
    id: str
    name: str
    createdAt: Optional[datetime] = None
    members: list[MemberResponse] = []


class MembershipResponse(BaseModel):
    """Schema returned when a user joins a team"""

    id: str
    teamId: str
    userId: str
    role: str
    joinedAt: datetime
    team: Optional[dict] = None
