"""Invitation schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...schemas import UserSummary
from ...shared.validators import clean_optional_text


class InvitationCreate(BaseModel):
    """
    Schema for inviting someone to a team.

    teamId and email are checked by the service so a missing value comes back
    as a plain "<field> is required" error; role is resolved there too.
    """

    teamId: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    @field_validator("teamId", "email", "role")
    @classmethod
    def strip_text(cls, v):
        return clean_optional_text(v)


class TeamRef(BaseModel):
    id: str
    name: str


class InvitationResponse(BaseModel):
    id: str
    teamId: str
    email: str
    role: str
    status: str
    invitedById: str
    createdAt: datetime
    respondedAt: Optional[datetime] = None
    team: Optional[TeamRef] = None
    invitedBy: Optional[UserSummary] = None
