"""Feedback router"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_admin, get_optional_user
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from ...schemas import user_summary
from .schemas import FeedbackCreate, FeedbackCreated, FeedbackResponse
from .service import FeedbackService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["Feedback"])

rate_limit_feedback = create_rate_limiter(limit=5, window_seconds=600, key_prefix="feedback", use_ip=True)


def get_feedback_service(db: Session = Depends(get_db)) -> FeedbackService:
    return FeedbackService(db)


@router.post("", response_model=FeedbackCreated, status_code=201)
def submit_feedback(
    data: FeedbackCreate,
    _: None = Depends(rate_limit_feedback),
    current_user: Optional[User] = Depends(get_optional_user),
    service: FeedbackService = Depends(get_feedback_service),
):
    """Submit feedback, signed in or anonymously"""
    feedback = service.submit(data, current_user)
    return FeedbackCreated(id=feedback.id, message="Feedback submitted successfully")


@router.get("", response_model=list[FeedbackResponse])
def list_feedback(
    _: User = Depends(get_current_admin),
    service: FeedbackService = Depends(get_feedback_service),
):
    """All feedback, newest first (admins only)"""
    return [
        FeedbackResponse(
            id=f.id,
            name=f.name,
            email=f.email,
            message=f.message,
            createdAt=f.created_at,
            user=user_summary(f.user),
        )
        for f in service.list_all()
    ]
