"""Team router - FastAPI endpoints for teams and membership"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Team, TeamMember, User
from ...schemas import user_summary
from .schemas import MemberResponse, MembershipResponse, TeamCreate, TeamResponse
from .service import TeamService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teams", tags=["Teams"])


def get_team_service(db: Session = Depends(get_db)) -> TeamService:
    """Dependency injection for TeamService"""
    return TeamService(db)


def _member_response(member: TeamMember) -> MemberResponse:
    return MemberResponse(
        id=member.id,
        role=member.role,
        joinedAt=member.joined_at,
        user=user_summary(member.user),
    )


def _team_response(team: Team) -> TeamResponse:
    return TeamResponse(
        id=team.id,
        name=team.name,
        createdAt=team.created_at,
        members=[_member_response(m) for m in team.members],
    )


@router.post("", response_model=TeamResponse, status_code=201)
def create_team(
    data: TeamCreate,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    """Create a team and add the creator as admin"""
    return _team_response(service.create_team(data, current_user))


@router.get("", response_model=list[TeamResponse])
def get_teams(
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    """Get all teams the current user belongs to"""
    return [_team_response(t) for t in service.get_teams(current_user)]


@router.get("/{team_id}", response_model=TeamResponse)
def get_team(
    team_id: str,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return _team_response(service.get_team(team_id, current_user))


@router.post("/{team_id}/join", response_model=MembershipResponse, status_code=201)
def join_team(
    team_id: str,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    """Join a team as a MEMBER"""
    member = service.join_team(team_id, current_user)
    return MembershipResponse(
        id=member.id,
        teamId=member.team_id,
        userId=member.user_id,
        role=member.role,
        joinedAt=member.joined_at,
        team={"id": member.team.id, "name": member.team.name},
    )


@router.get("/{team_id}/members", response_model=list[MemberResponse])
def get_members(
    team_id: str,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    """List team members in join order"""
    return [_member_response(m) for m in service.get_members(team_id, current_user)]
