"""
Focus service - timer lifecycle and focus log bookkeeping.

Each user is either Idle (no open timer) or Running (exactly one timer with
ended_at = NULL). start() moves Idle -> Running, end() moves Running -> Idle.
The one-open-timer rule is checked here and backed by a partial unique index,
so concurrent starts that slip past the check still fail with a conflict.

Timers measure whole seconds. Their mirrored FocusLog rows measure whole
minutes (duration_seconds // 60); reporting converts back with x60. Mirroring
is best-effort: a failed FocusLog write is logged and never fails the timer
transition that triggered it.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import FOCUS_LOG_PAGE_SIZE
from ...errors import AuthorizationError, ConflictError, NotFoundError
from ...models import FocusLog, Task, Timer, User
from ...shared.timeutils import elapsed_seconds, utcnow
from ..teams.membership import MembershipGuard
from .repository import FocusRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class FocusService:
    """Service layer for focus timers and logs"""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.repo = FocusRepository()
        self.guard = MembershipGuard(db)
        self.clock = clock or utcnow

    # ========================================================================
    # TIMER LIFECYCLE
    # ========================================================================

    def start_timer(self, user: User, task_id: str) -> Timer:
        """Start a timer on a task (Idle -> Running)"""
        task = self.db.query(Task).filter(Task.id == task_id).first()
        if not task:
            raise NotFoundError("Task not found")

        self.guard.require_member(task.team_id, user.id)

        if self.repo.get_open_timer(self.db, user.id):
            raise ConflictError("Timer is already running")

        now = self.clock()
        try:
            timer = self.repo.create_timer(self.db, user.id, task.id, started_at=now)
        except IntegrityError as e:
            # Lost a race against a concurrent start; the partial unique index caught it
            self.db.rollback()
            logger.warning(f"⚠️ Concurrent timer start rejected for user {user.id}: {e}")
            raise ConflictError("Timer is already running") from e

        logger.info(f"▶️ Timer {timer.id} started by {user.id} on task {task.id}")
        self._mirror_start(timer)
        return self.repo.get_timer(self.db, timer.id)

    def end_timer(self, user: User, timer_id: Optional[str] = None) -> Timer:
        """End the given timer, or the caller's running one (Running -> Idle)"""
        if timer_id:
            timer = self.repo.get_timer(self.db, timer_id)
            if not timer:
                raise NotFoundError("Timer not found")
            if timer.user_id != user.id:
                raise AuthorizationError("You can only end your own timers")
            if timer.ended_at is not None:
                raise ConflictError("Timer is already ended")
        else:
            timer = self.repo.get_open_timer(self.db, user.id)
            if not timer:
                raise NotFoundError("No active timer")

        # The task may have moved or the user may have left the team since start
        self.guard.require_member(timer.task.team_id, user.id)

        now = self.clock()
        ended_at = max(now, timer.started_at)
        duration = elapsed_seconds(timer.started_at, now)

        closed = self.repo.close_timer(self.db, timer, ended_at, duration)
        if closed is None:
            raise ConflictError("Timer is already ended")

        logger.info(f"⏹️ Timer {timer.id} ended by {user.id} after {duration}s")
        self._mirror_end(closed)
        return self.repo.get_timer(self.db, closed.id)

    def get_current_timer(self, user: User) -> Optional[Timer]:
        return self.repo.get_open_timer(self.db, user.id)

    def list_active_timers(self, user: User, team_id: Optional[str] = None) -> list[dict]:
        """
        Running timers on a team's tasks, newest first. Without a team the
        caller's own running timers are returned.
        """
        if team_id:
            self.guard.require_member(team_id, user.id)
            rows = self.repo.get_active_timers_for_team(self.db, team_id)
        else:
            rows = self.repo.get_active_timers_for_user(self.db, user.id)

        now = self.clock()
        return [
            {
                "id": timer.id,
                "userId": timer.user_id,
                "userName": user_name,
                "userEmail": user_email,
                "taskId": timer.task_id,
                "taskTitle": task_title,
                "startedAt": timer.started_at,
                "elapsedSeconds": elapsed_seconds(timer.started_at, now),
            }
            for timer, task_title, user_name, user_email in rows
        ]

    # ========================================================================
    # FOCUS LOG MIRROR (best-effort)
    # ========================================================================

    def _mirror_start(self, timer: Timer) -> None:
        try:
            self.repo.create_focus_log(self.db, timer.user_id, timer.started_at, timer_id=timer.id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Could not open focus log for timer {timer.id}: {e}")

    def _mirror_end(self, timer: Timer) -> None:
        minutes = (timer.duration_seconds or 0) // 60
        try:
            log = self.repo.get_open_focus_log_for_timer(self.db, timer.id)
            if log:
                self.repo.close_focus_log(self.db, log, timer.ended_at, minutes)
            else:
                # Start mirror was lost; record the finished session so reporting stays whole
                log = FocusLog(
                    user_id=timer.user_id,
                    timer_id=timer.id,
                    start_time=timer.started_at,
                    end_time=timer.ended_at,
                    duration_minutes=minutes,
                )
                self.db.add(log)
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Could not close focus log for timer {timer.id}: {e}")

    # ========================================================================
    # FOCUS LOGS
    # ========================================================================

    def get_focus_logs(self, user: User) -> list[FocusLog]:
        return self.repo.get_focus_logs(self.db, user.id, limit=FOCUS_LOG_PAGE_SIZE)

    def start_focus_log(self, user: User) -> FocusLog:
        """Open a focus log that is not tied to a timer"""
        log = self.repo.create_focus_log(self.db, user.id, self.clock())
        logger.info(f"📒 Focus log {log.id} started by {user.id}")
        return log

    def end_focus_log(self, user: User, log_id: str) -> FocusLog:
        log = self.repo.get_focus_log(self.db, log_id)
        if not log:
            raise NotFoundError("Log not found")
        if log.user_id != user.id:
            raise AuthorizationError("You can only end your own focus logs")
        if log.timer_id is not None:
            raise ConflictError("This focus log is managed by a timer; end the timer instead")
        if log.end_time is not None:
            raise ConflictError("Focus log is already ended")

        now = self.clock()
        minutes = elapsed_seconds(log.start_time, now) // 60
        return self.repo.close_focus_log(self.db, log, max(now, log.start_time), minutes)
