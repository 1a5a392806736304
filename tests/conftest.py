"""
Pytest configuration and shared fixtures for RemoteZen API tests.

Every test gets its own in-memory SQLite database and an app built around it.
Factory fixtures write straight to the database; the HTTP client talks to the
same database through the app.
"""

import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Settings are read at import time, so they must be in place before remotezen loads
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from remotezen.database import Database  # noqa: E402
from remotezen.domain.teams.repository import TeamRepository  # noqa: E402
from remotezen.main import create_app  # noqa: E402
from remotezen.models import Task, TeamMember, User  # noqa: E402
from remotezen.security_utils import create_access_token, hash_password  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"


class FakeClock:
    """Manually advanced wall clock (naive UTC)"""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now

    def set(self, value: datetime) -> datetime:
        self.now = value
        return self.now


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 4, 9, 0, 0))


@pytest.fixture
def app(database, clock):
    return create_app(database=database, clock=clock)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def user_password():
    return TEST_PASSWORD


@pytest.fixture
def password_hash():
    # bcrypt is slow on purpose; hash once per test
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def make_user(db_session, password_hash):
    counter = {"n": 0}

    def _make_user(name=None, email=None, role="USER"):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=name or f"User {n}",
            email=(email or f"user{n}@example.com").lower(),
            password_hash=password_hash,
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_team(db_session):
    def _make_team(owner, name="Team", role="ADMIN"):
        return TeamRepository.create_team(db_session, name, owner.id, owner_role=role)

    return _make_team


@pytest.fixture
def add_member(db_session):
    def _add_member(team, user, role="MEMBER") -> TeamMember:
        return TeamRepository.add_member(db_session, team.id, user.id, role=role)

    return _add_member


@pytest.fixture
def make_task(db_session):
    def _make_task(team, creator, title="Write report", **fields) -> Task:
        task = Task(team_id=team.id, title=title, created_by_id=creator.id, **fields)
        db_session.add(task)
        db_session.commit()
        db_session.refresh(task)
        return task

    return _make_task


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


@pytest.fixture
def headers():
    return auth_headers
