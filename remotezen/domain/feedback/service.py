"""Feedback service - storing and listing product feedback"""

import logging
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Feedback, User
from .schemas import FeedbackCreate

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, db: Session):
        self.db = db

    def submit(self, data: FeedbackCreate, user: Optional[User] = None) -> Feedback:
        """Store feedback; signed-in users fill in missing name/email from their account"""
        feedback = Feedback(
            user_id=user.id if user else None,
            name=data.name or (user.name if user else None),
            email=data.email or (user.email if user else None),
            message=data.message,
        )
        self.db.add(feedback)
        self.db.commit()
        self.db.refresh(feedback)
        logger.info(f"💬 Feedback {feedback.id} received{f' from {user.id}' if user else ''}")
        return feedback

    def list_all(self) -> list[Feedback]:
        return (
            self.db.query(Feedback)
            .options(joinedload(Feedback.user))
            .order_by(Feedback.created_at.desc())
            .all()
        )
