"""Feedback schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...schemas import UserSummary
from ...shared.validators import clean_optional_text, validate_email, validate_required_text


class FeedbackCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return clean_optional_text(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(clean_optional_text(v))

    @field_validator("message")
    @classmethod
    def validate_message(cls, v):
        return validate_required_text(v, "Message")


class FeedbackCreated(BaseModel):
    id: str
    message: str


class FeedbackResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    message: str
    createdAt: datetime
    user: Optional[UserSummary] = None
