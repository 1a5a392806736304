"""Invitation router - FastAPI endpoints for team invitations"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Invitation, User
from ...schemas import user_summary
from .schemas import InvitationCreate, InvitationResponse, TeamRef
from .service import InvitationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invites", tags=["Invitations"])


def get_invitation_service(db: Session = Depends(get_db)) -> InvitationService:
    """Dependency injection for InvitationService"""
    return InvitationService(db)


def invitation_response(invitation: Invitation) -> InvitationResponse:
    return InvitationResponse(
        id=invitation.id,
        teamId=invitation.team_id,
        email=invitation.email,
        role=invitation.role,
        status=invitation.status,
        invitedById=invitation.invited_by_id,
        createdAt=invitation.created_at,
        respondedAt=invitation.responded_at,
        team=TeamRef(id=invitation.team.id, name=invitation.team.name) if invitation.team else None,
        invitedBy=user_summary(invitation.invited_by),
    )


@router.post("", response_model=InvitationResponse, status_code=201)
def create_invitation(
    data: InvitationCreate,
    current_user: User = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
):
    """Invite an email address to a team (managers and admins only)"""
    return invitation_response(service.create_invitation(data, current_user))


@router.get("", response_model=list[InvitationResponse])
def get_team_invitations(
    teamId: str = Query(..., description="Team whose pending invitations to list"),
    current_user: User = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
):
    return [invitation_response(i) for i in service.list_for_team(teamId, current_user)]


@router.get("/mine", response_model=list[InvitationResponse])
def get_my_invitations(
    current_user: User = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
):
    """Pending invitations addressed to the current user's email"""
    return [invitation_response(i) for i in service.list_mine(current_user)]


@router.post("/{invitation_id}/accept", response_model=InvitationResponse)
def accept_invitation(
    invitation_id: str,
    current_user: User = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
):
    return invitation_response(service.accept(invitation_id, current_user))


@router.post("/{invitation_id}/decline", response_model=InvitationResponse)
def decline_invitation(
    invitation_id: str,
    current_user: User = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
):
    return invitation_response(service.decline(invitation_id, current_user))
