"""
Seed script - creates the demo admin account and the shared demo team
Usage: python seed.py

Safe to run repeatedly: existing rows are reused, missing ones are added.
"""
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy.exc import SQLAlchemyError

from remotezen.database import Database
from remotezen.models import Team, TeamMember, User
from remotezen.security_utils import hash_password

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@remotezen.dev")
ADMIN_NAME = os.getenv("SEED_ADMIN_NAME", "RemoteZen Admin")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "changeme123")
DEMO_TEAM_ID = "demo-team-singleton"
DEMO_TEAM_NAME = "Demo Team"


def seed(database: Database) -> tuple[User, Team]:
    """Upsert the admin user and the demo team with the admin as ADMIN member"""
    database.create_all()
    db = database.session()
    try:
        admin = db.query(User).filter(User.email == ADMIN_EMAIL).first()
        if admin:
            logger.info(f"Admin user already exists: {ADMIN_EMAIL}")
            admin.role = "ADMIN"
        else:
            admin = User(name=ADMIN_NAME, email=ADMIN_EMAIL, password_hash=hash_password(ADMIN_PASSWORD), role="ADMIN")
            db.add(admin)
            db.flush()
            logger.info(f"Created admin user: {ADMIN_EMAIL}")

        team = db.query(Team).filter(Team.id == DEMO_TEAM_ID).first()
        if not team:
            team = Team(id=DEMO_TEAM_ID, name=DEMO_TEAM_NAME)
            db.add(team)
            db.flush()
            logger.info(f"Created team: {DEMO_TEAM_NAME}")

        membership = (
            db.query(TeamMember)
            .filter(TeamMember.team_id == team.id, TeamMember.user_id == admin.id)
            .first()
        )
        if membership:
            membership.role = "ADMIN"
        else:
            db.add(TeamMember(team_id=team.id, user_id=admin.id, role="ADMIN"))

        db.commit()
        db.refresh(admin)
        db.refresh(team)
        return admin, team
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    database = Database()
    try:
        seed(database)
        logger.info("✅ Seed completed successfully!")
    except SQLAlchemyError as e:
        logger.error(f"❌ Seed failed: {e}")
        sys.exit(1)
    finally:
        database.dispose()
