"""Task domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...schemas import UserSummary
from ...shared.timeutils import to_naive_utc
from ...shared.validators import clean_optional_text, validate_required_text

TaskStatus = Literal["PENDING", "IN_PROGRESS", "DONE"]


def _naive_due_date(v: Optional[datetime]) -> Optional[datetime]:
    return to_naive_utc(v) if v is not None else None


class TaskCreate(BaseModel):
    """Schema for creating a new task"""

    teamId: str
    title: str
    description: Optional[str] = None
    assignedToId: Optional[str] = None
    dueDate: Optional[datetime] = None

    @field_validator("teamId")
    @classmethod
    def validate_team_id(cls, v):
        return validate_required_text(v, "teamId")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return validate_required_text(v, "Title")

    @field_validator("description", "assignedToId")
    @classmethod
    def validate_optional_text(cls, v):
        return clean_optional_text(v)

    @field_validator("dueDate")
    @classmethod
    def validate_due_date(cls, v):
        return _naive_due_date(v)


class TaskUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body change:
    an explicit null clears assignedToId/dueDate/description, an absent key
    leaves the stored value alone.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    assignedToId: Optional[str] = None
    dueDate: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return validate_required_text(v, "Title")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v is None:
            raise ValueError("Status cannot be null")
        return v

    @field_validator("description", "assignedToId")
    @classmethod
    def validate_optional_text(cls, v):
        return clean_optional_text(v)

    @field_validator("dueDate")
    @classmethod
    def validate_due_date(cls, v):
        return _naive_due_date(v)

    def changes(self) -> dict:
        """Fields explicitly sent by the client, keyed by request name"""
        return {name: getattr(self, name) for name in self.model_fields_set}


class TeamRef(BaseModel):
    id: str
    name: str


class TaskResponse(BaseModel):
    """Schema for task response"""

    id: str
    teamId: str
    title: str
    description: Optional[str] = None
    status: str
    assignedToId: Optional[str] = None
    createdById: str
    dueDate: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    team: Optional[TeamRef] = None
    createdBy: Optional[UserSummary] = None
    assignedTo: Optional[UserSummary] = None
