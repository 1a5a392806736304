"""Invitation service - issuing and answering team invitations"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...config import INVITE_STRICT_ROLES
from ...errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ...models import TEAM_ROLES, Invitation, User
from ...shared.timeutils import utcnow
from ...shared.validators import validate_email
from ..teams.membership import MembershipGuard
from ..teams.repository import TeamRepository
from .repository import InvitationRepository
from .schemas import InvitationCreate

logger = logging.getLogger(__name__)


def resolve_role(role, strict: bool = False) -> str:
    """
    Map a requested role onto a team role.

    Unset means MEMBER. Unknown values are coerced to MEMBER unless strict,
    in which case they are rejected.
    """
    if not role:
        return "MEMBER"
    normalized = role.upper()
    if normalized in TEAM_ROLES:
        return normalized
    if strict:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(TEAM_ROLES)}")
    logger.info(f"ℹ️ Unknown invitation role {role!r} coerced to MEMBER")
    return "MEMBER"


class InvitationService:
    """Service layer for invitation business logic"""

    def __init__(self, db: Session, strict_roles: bool = INVITE_STRICT_ROLES):
        self.db = db
        self.repo = InvitationRepository()
        self.teams = TeamRepository()
        self.guard = MembershipGuard(db)
        self.strict_roles = strict_roles

    def create_invitation(self, data: InvitationCreate, inviter: User) -> Invitation:
        if not data.teamId:
            raise ValidationError("teamId is required")
        if not data.email:
            raise ValidationError("email is required")
        try:
            email = validate_email(data.email)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        self.guard.require_manager(data.teamId, inviter.id, action="invite members")
        role = resolve_role(data.role, strict=self.strict_roles)

        if self.repo.get_member_by_email(self.db, data.teamId, email):
            raise ConflictError("User is already a member of this team")
        if self.repo.get_pending(self.db, data.teamId, email):
            raise ConflictError("An invitation is already pending for this email")

        invitation = self.repo.create_invitation(self.db, data.teamId, email, role, inviter.id)
        logger.info(f"✉️ Invitation {invitation.id} for {email} to team {data.teamId} as {role}")
        return self.repo.get_invitation(self.db, invitation.id)

    def list_for_team(self, team_id: str, user: User) -> list[Invitation]:
        """Pending invitations of a team, newest first"""
        self.guard.require_member(team_id, user.id)
        return self.repo.get_pending_for_team(self.db, team_id)

    def list_mine(self, user: User) -> list[Invitation]:
        return self.repo.get_pending_for_email(self.db, user.email.lower())

    def _get_addressed_to(self, invitation_id: str, user: User) -> Invitation:
        invitation = self.repo.get_invitation(self.db, invitation_id)
        if not invitation:
            raise NotFoundError("Invitation not found")
        if invitation.email != user.email.lower():
            raise AuthorizationError("This invitation is not addressed to you")
        if invitation.status != "PENDING":
            raise ConflictError(f"Invitation has already been {invitation.status.lower()}")
        return invitation

    def _join(self, invitation: Invitation, user: User) -> None:
        """Add the membership the invitation grants, unless it already exists"""
        if not self.guard.is_member(invitation.team_id, user.id):
            self.teams.add_member(self.db, invitation.team_id, user.id, role=invitation.role, commit=False)

    def accept(self, invitation_id: str, user: User) -> Invitation:
        invitation = self._get_addressed_to(invitation_id, user)
        try:
            self._join(invitation, user)
            self.repo.set_status(self.db, invitation, "ACCEPTED", utcnow())
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Invitation could not be accepted") from e

        logger.info(f"✅ Invitation {invitation.id} accepted by {user.id}")
        return self.repo.get_invitation(self.db, invitation.id)

    def decline(self, invitation_id: str, user: User) -> Invitation:
        invitation = self._get_addressed_to(invitation_id, user)
        self.repo.set_status(self.db, invitation, "DECLINED", utcnow())
        logger.info(f"❎ Invitation {invitation.id} declined by {user.id}")
        return self.repo.get_invitation(self.db, invitation.id)

    def accept_pending_for(self, user: User) -> int:
        """
        Accept every pending invitation addressed to the user's email.

        Does not commit; registration calls this inside its own transaction.
        """
        now = utcnow()
        invitations = self.repo.get_pending_for_email(self.db, user.email.lower())
        for invitation in invitations:
            self._join(invitation, user)
            self.repo.set_status(self.db, invitation, "ACCEPTED", now, commit=False)
        if invitations:
            logger.info(f"✅ Auto-accepted {len(invitations)} invitation(s) for {user.email}")
        return len(invitations)
