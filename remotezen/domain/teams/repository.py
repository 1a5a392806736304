"""Team repository - Database operations for teams and memberships"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import Team, TeamMember


class TeamRepository:
    """Repository for team database operations"""

    @staticmethod
    def get_team(db: Session, team_id: str) -> Optional[Team]:
        return (
            db.query(Team)
            .options(selectinload(Team.members).selectinload(TeamMember.user))
            .filter(Team.id == team_id)
            .first()
        )

    @staticmethod
    def get_teams_for_user(db: Session, user_id: str) -> list[Team]:
        """Teams the user belongs to, oldest membership first"""
        return (
            db.query(Team)
            .join(TeamMember, TeamMember.team_id == Team.id)
            .filter(TeamMember.user_id == user_id)
            .options(selectinload(Team.members).selectinload(TeamMember.user))
            .order_by(TeamMember.joined_at.asc())
            .all()
        )

    @staticmethod
    def create_team(db: Session, name: str, owner_id: str, owner_role: str = "ADMIN", commit: bool = True) -> Team:
        """Create a team with its first member"""
        team = Team(name=name)
        team.members.append(TeamMember(user_id=owner_id, role=owner_role))
        db.add(team)
        if commit:
            db.commit()
            db.refresh(team)
        else:
            db.flush()
        return team

    @staticmethod
    def add_member(db: Session, team_id: str, user_id: str, role: str = "MEMBER", commit: bool = True) -> TeamMember:
        member = TeamMember(team_id=team_id, user_id=user_id, role=role)
        db.add(member)
        if commit:
            db.commit()
            db.refresh(member)
        else:
            db.flush()
        return member

    @staticmethod
    def get_members(db: Session, team_id: str) -> list[TeamMember]:
        return (
            db.query(TeamMember)
            .options(selectinload(TeamMember.user))
            .filter(TeamMember.team_id == team_id)
            .order_by(TeamMember.joined_at.asc())
            .all()
        )

    @staticmethod
    def get_memberships_for_user(db: Session, user_id: str) -> list[TeamMember]:
        return (
            db.query(TeamMember)
            .options(selectinload(TeamMember.team))
            .filter(TeamMember.user_id == user_id)
            .order_by(TeamMember.joined_at.asc())
            .all()
        )
