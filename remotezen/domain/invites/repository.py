"""Invitation repository - Database operations for team invitations"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Invitation, TeamMember, User


class InvitationRepository:
    """Repository for invitation database operations"""

    @staticmethod
    def get_invitation(db: Session, invitation_id: str) -> Optional[Invitation]:
        return (
            db.query(Invitation)
            .options(joinedload(Invitation.team), joinedload(Invitation.invited_by))
            .filter(Invitation.id == invitation_id)
            .first()
        )

    @staticmethod
    def get_pending_for_team(db: Session, team_id: str) -> list[Invitation]:
        return (
            db.query(Invitation)
            .options(joinedload(Invitation.team), joinedload(Invitation.invited_by))
            .filter(Invitation.team_id == team_id, Invitation.status == "PENDING")
            .order_by(Invitation.created_at.desc())
            .all()
        )

    @staticmethod
    def get_pending_for_email(db: Session, email: str) -> list[Invitation]:
        return (
            db.query(Invitation)
            .options(joinedload(Invitation.team), joinedload(Invitation.invited_by))
            .filter(Invitation.email == email, Invitation.status == "PENDING")
            .order_by(Invitation.created_at.desc())
            .all()
        )

    @staticmethod
    def get_pending(db: Session, team_id: str, email: str) -> Optional[Invitation]:
        return (
            db.query(Invitation)
            .filter(
                Invitation.team_id == team_id,
                Invitation.email == email,
                Invitation.status == "PENDING",
            )
            .first()
        )

    @staticmethod
    def get_member_by_email(db: Session, team_id: str, email: str) -> Optional[TeamMember]:
        return (
            db.query(TeamMember)
            .join(User, User.id == TeamMember.user_id)
            .filter(TeamMember.team_id == team_id, User.email == email)
            .first()
        )

    @staticmethod
    def create_invitation(db: Session, team_id: str, email: str, role: str, invited_by_id: str) -> Invitation:
        invitation = Invitation(team_id=team_id, email=email, role=role, invited_by_id=invited_by_id)
        db.add(invitation)
        db.commit()
        db.refresh(invitation)
        return invitation

    @staticmethod
    def set_status(
        db: Session, invitation: Invitation, status: str, responded_at: datetime, commit: bool = True
    ) -> Invitation:
        invitation.status = status
        invitation.responded_at = responded_at
        if commit:
            db.commit()
            db.refresh(invitation)
        else:
            db.flush()
        return invitation
