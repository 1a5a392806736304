"""Focus repository - Database operations for timers and focus logs"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import FocusLog, Task, Timer, User


class FocusRepository:
    """Repository for timer and focus log database operations"""

    # Timers
    @staticmethod
    def get_timer(db: Session, timer_id: str) -> Optional[Timer]:
        return (
            db.query(Timer)
            .options(joinedload(Timer.task).joinedload(Task.team))
            .filter(Timer.id == timer_id)
            .first()
        )

    @staticmethod
    def get_open_timer(db: Session, user_id: str) -> Optional[Timer]:
        """The user's running timer, if any"""
        return (
            db.query(Timer)
            .options(joinedload(Timer.task).joinedload(Task.team))
            .filter(Timer.user_id == user_id, Timer.ended_at.is_(None))
            .order_by(Timer.started_at.desc())
            .first()
        )

    @staticmethod
    def create_timer(db: Session, user_id: str, task_id: str, started_at: datetime) -> Timer:
        """Insert and commit a running timer. Raises IntegrityError if one is already open."""
        timer = Timer(user_id=user_id, task_id=task_id, started_at=started_at)
        db.add(timer)
        db.commit()
        db.refresh(timer)
        return timer

    @staticmethod
    def close_timer(db: Session, timer: Timer, ended_at: datetime, duration_seconds: int) -> Optional[Timer]:
        """Close a still-open timer. Returns None if another request closed it first."""
        updated = (
            db.query(Timer)
            .filter(Timer.id == timer.id, Timer.ended_at.is_(None))
            .update(
                {Timer.ended_at: ended_at, Timer.duration_seconds: duration_seconds},
                synchronize_session=False,
            )
        )
        db.commit()
        if not updated:
            return None
        db.refresh(timer)
        return timer

    @staticmethod
    def get_active_timers_for_team(db: Session, team_id: str) -> list[tuple[Timer, str, Optional[str], str]]:
        """Open timers on the team's tasks as (timer, task title, user name, user email), newest first"""
        return (
            db.query(Timer, Task.title, User.name, User.email)
            .join(Task, Task.id == Timer.task_id)
            .join(User, User.id == Timer.user_id)
            .filter(Task.team_id == team_id, Timer.ended_at.is_(None))
            .order_by(Timer.started_at.desc())
            .all()
        )

    @staticmethod
    def get_active_timers_for_user(db: Session, user_id: str) -> list[tuple[Timer, str, Optional[str], str]]:
        return (
            db.query(Timer, Task.title, User.name, User.email)
            .join(Task, Task.id == Timer.task_id)
            .join(User, User.id == Timer.user_id)
            .filter(Timer.user_id == user_id, Timer.ended_at.is_(None))
            .order_by(Timer.started_at.desc())
            .all()
        )

    # Focus logs
    @staticmethod
    def get_focus_log(db: Session, log_id: str) -> Optional[FocusLog]:
        return db.query(FocusLog).filter(FocusLog.id == log_id).first()

    @staticmethod
    def get_open_focus_log_for_timer(db: Session, timer_id: str) -> Optional[FocusLog]:
        return (
            db.query(FocusLog)
            .filter(FocusLog.timer_id == timer_id, FocusLog.end_time.is_(None))
            .first()
        )

    @staticmethod
    def create_focus_log(
        db: Session, user_id: str, start_time: datetime, timer_id: Optional[str] = None
    ) -> FocusLog:
        log = FocusLog(user_id=user_id, start_time=start_time, timer_id=timer_id)
        db.add(log)
        db.commit()
        db.refresh(log)
        return log

    @staticmethod
    def close_focus_log(db: Session, log: FocusLog, end_time: datetime, duration_minutes: int) -> FocusLog:
        log.end_time = end_time
        log.duration_minutes = duration_minutes
        db.commit()
        db.refresh(log)
        return log

    @staticmethod
    def get_focus_logs(db: Session, user_id: str, limit: int = 100) -> list[FocusLog]:
        return (
            db.query(FocusLog)
            .filter(FocusLog.user_id == user_id)
            .order_by(FocusLog.start_time.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_completed_focus_logs_since(db: Session, user_id: str, since: datetime) -> list[FocusLog]:
        return (
            db.query(FocusLog)
            .filter(
                FocusLog.user_id == user_id,
                FocusLog.start_time >= since,
                FocusLog.end_time.isnot(None),
                FocusLog.duration_minutes.isnot(None),
            )
            .order_by(FocusLog.start_time.asc())
            .all()
        )
