"""
Membership guard - the single place that decides whether a user may act on a team.

Lookups are read-only. A missing team and a missing membership are told apart by
`team_exists`/`is_member`, but `require_member` reports both as an authorization
failure so callers never leak whether a team exists.
"""

import logging
from collections.abc import Iterable
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import AuthorizationError, ValidationError
from ...models import MANAGER_ROLES, Team, TeamMember

logger = logging.getLogger(__name__)


def _require_identifier(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return str(value)


def require_role(membership: Optional[TeamMember], allowed_roles: Iterable[str]) -> bool:
    """True when the membership exists and holds one of the allowed roles"""
    return membership is not None and membership.role in set(allowed_roles)


class MembershipGuard:
    def __init__(self, db: Session):
        self.db = db

    def is_member(self, team_id: str, user_id: str) -> Optional[TeamMember]:
        team_id = _require_identifier(team_id, "teamId")
        user_id = _require_identifier(user_id, "userId")
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.team_id == team_id, TeamMember.user_id == user_id)
            .first()
        )

    def team_exists(self, team_id: str) -> bool:
        team_id = _require_identifier(team_id, "teamId")
        return self.db.query(Team.id).filter(Team.id == team_id).first() is not None

    def require_member(self, team_id: str, user_id: str) -> TeamMember:
        membership = self.is_member(team_id, user_id)
        if membership is None:
            logger.warning(f"🚫 User {user_id} is not a member of team {team_id}")
            raise AuthorizationError("You are not a member of this team")
        return membership

    def require_manager(self, team_id: str, user_id: str, action: str = "perform this action") -> TeamMember:
        membership = self.require_member(team_id, user_id)
        if not require_role(membership, MANAGER_ROLES):
            logger.warning(f"🚫 User {user_id} ({membership.role}) cannot {action} on team {team_id}")
            raise AuthorizationError(f"Only managers or admins can {action}")
        return membership

    def team_ids_for(self, user_id: str) -> list[str]:
        rows = self.db.query(TeamMember.team_id).filter(TeamMember.user_id == user_id).all()
        return [row[0] for row in rows]
