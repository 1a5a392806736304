import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base
from .shared.timeutils import utcnow

TEAM_ROLES = ("MEMBER", "MANAGER", "ADMIN")
MANAGER_ROLES = ("MANAGER", "ADMIN")


def generate_id():
    """Generate a unique string identifier"""
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=True)  # null for external identities
    auth_provider = Column(String(50), default="credentials", nullable=False)
    role = Column(String(20), default="USER", nullable=False)  # global role, not team role
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    memberships = relationship("TeamMember", back_populates="user", cascade="all, delete-orphan")
    timers = relationship("Timer", back_populates="user", cascade="all, delete-orphan")
    focus_logs = relationship("FocusLog", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (CheckConstraint("role IN ('USER','ADMIN')", name="ck_user_role"),)


class Team(Base):
    __tablename__ = "teams"

    id = Column(String(64), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    members = relationship(
        "TeamMember",
        back_populates="team",
        cascade="all, delete-orphan",
        order_by="TeamMember.joined_at",
    )
    tasks = relationship("Task", back_populates="team", cascade="all, delete-orphan")
    invitations = relationship("Invitation", back_populates="team", cascade="all, delete-orphan")


class TeamMember(Base):
    __tablename__ = "team_members"

    id = Column(String(36), primary_key=True, default=generate_id)
    team_id = Column(String(64), ForeignKey("teams.id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    role = Column(String(20), default="MEMBER", nullable=False)
    joined_at = Column(DateTime, default=utcnow, nullable=False)

    team = relationship("Team", back_populates="members")
    user = relationship("User", back_populates="memberships")

    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_member"),
        CheckConstraint("role IN ('MEMBER','MANAGER','ADMIN')", name="ck_team_member_role"),
    )


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=generate_id)
    team_id = Column(String(64), ForeignKey("teams.id", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), default="PENDING", nullable=False)
    assigned_to_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    due_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    team = relationship("Team", back_populates="tasks")
    assigned_to = relationship("User", foreign_keys=[assigned_to_id])
    created_by = relationship("User", foreign_keys=[created_by_id])
    timers = relationship("Timer", back_populates="task", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("status IN ('PENDING','IN_PROGRESS','DONE')", name="ck_task_status"),
    )


class Timer(Base):
    __tablename__ = "timers"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    task_id = Column(String(36), ForeignKey("tasks.id", ondelete="CASCADE"), index=True, nullable=False)
    started_at = Column(DateTime, default=utcnow, nullable=False)
    ended_at = Column(DateTime, nullable=True)
    duration_seconds = Column(Integer, nullable=True)

    user = relationship("User", back_populates="timers")
    task = relationship("Task", back_populates="timers")


# At most one open timer per user, enforced by the database as well as the service
Index(
    "uq_timers_one_open_per_user",
    Timer.user_id,
    unique=True,
    postgresql_where=Timer.ended_at.is_(None),
    sqlite_where=Timer.ended_at.is_(None),
)


class FocusLog(Base):
    __tablename__ = "focus_logs"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    # Set when the log mirrors a timer; stand-alone logs leave it empty
    timer_id = Column(String(36), ForeignKey("timers.id", ondelete="SET NULL"), index=True, nullable=True)
    start_time = Column(DateTime, default=utcnow, nullable=False)
    end_time = Column(DateTime, nullable=True)
    duration_minutes = Column(Integer, nullable=True)

    user = relationship("User", back_populates="focus_logs")


class Invitation(Base):
    __tablename__ = "invitations"

    id = Column(String(36), primary_key=True, default=generate_id)
    team_id = Column(String(64), ForeignKey("teams.id", ondelete="CASCADE"), index=True, nullable=False)
    email = Column(String(255), index=True, nullable=False)
    role = Column(String(20), default="MEMBER", nullable=False)
    invited_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    status = Column(String(20), default="PENDING", nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    responded_at = Column(DateTime, nullable=True)

    team = relationship("Team", back_populates="invitations")
    invited_by = relationship("User")

    __table_args__ = (
        CheckConstraint("status IN ('PENDING','ACCEPTED','DECLINED')", name="ck_invitation_status"),
        CheckConstraint("role IN ('MEMBER','MANAGER','ADMIN')", name="ck_invitation_role"),
    )


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User")
