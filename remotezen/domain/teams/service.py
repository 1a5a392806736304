"""Team service - Business logic for teams and membership"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import AuthorizationError, ConflictError, NotFoundError
from ...models import Team, TeamMember, User
from .membership import MembershipGuard
from .repository import TeamRepository
from .schemas import TeamCreate

logger = logging.getLogger(__name__)


class TeamService:
    """Service layer for team business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TeamRepository()
        self.guard = MembershipGuard(db)

    def create_team(self, data: TeamCreate, user: User) -> Team:
        """Create a team; the creator becomes its first ADMIN"""
        team = self.repo.create_team(self.db, data.name, user.id, owner_role="ADMIN")
        logger.info(f"👥 Team {team.id} created by {user.id}")
        return self.repo.get_team(self.db, team.id)

    def get_teams(self, user: User) -> list[Team]:
        return self.repo.get_teams_for_user(self.db, user.id)

    def get_team(self, team_id: str, user: User) -> Team:
        """A team with its members; unknown teams look the same as foreign ones"""
        self.guard.require_member(team_id, user.id)
        team = self.repo.get_team(self.db, team_id)
        if not team:
            raise AuthorizationError("You are not a member of this team")
        return team

    def join_team(self, team_id: str, user: User) -> TeamMember:
        if self.guard.is_member(team_id, user.id):
            raise ConflictError("You are already a member of this team")
        if not self.guard.team_exists(team_id):
            raise NotFoundError("Team not found")

        try:
            member = self.repo.add_member(self.db, team_id, user.id, role="MEMBER")
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("You are already a member of this team") from e

        logger.info(f"➕ User {user.id} joined team {team_id}")
        return member

    def get_members(self, team_id: str, user: User) -> list[TeamMember]:
        self.guard.require_member(team_id, user.id)
        return self.repo.get_members(self.db, team_id)
