"""Focus router - FastAPI endpoints for timers, focus logs and summaries"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import FocusLog, Timer, User
from ...shared.timeutils import to_naive_utc
from .analytics import MAX_SUMMARY_DAYS, FocusAnalytics
from .schemas import (
    ActiveTimerResponse,
    EndTimerRequest,
    FocusLogResponse,
    FocusSummaryResponse,
    StartTimerRequest,
    TaskRef,
    TimerResponse,
)
from .service import FocusService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/focus", tags=["Focus"])


def get_focus_service(request: Request, db: Session = Depends(get_db)) -> FocusService:
    """Dependency injection for FocusService, using the app clock"""
    return FocusService(db, clock=getattr(request.app.state, "clock", None))


def timer_response(timer: Timer) -> TimerResponse:
    return TimerResponse(
        id=timer.id,
        userId=timer.user_id,
        taskId=timer.task_id,
        startedAt=timer.started_at,
        endedAt=timer.ended_at,
        durationSeconds=timer.duration_seconds,
        task=TaskRef(id=timer.task.id, title=timer.task.title) if timer.task else None,
    )


def focus_log_response(log: FocusLog) -> FocusLogResponse:
    return FocusLogResponse(
        id=log.id,
        userId=log.user_id,
        timerId=log.timer_id,
        startTime=log.start_time,
        endTime=log.end_time,
        durationMinutes=log.duration_minutes,
    )


# ============================================================================
# TIMERS
# ============================================================================


@router.post("/start", response_model=TimerResponse, status_code=201)
def start_timer(
    data: StartTimerRequest,
    current_user: User = Depends(get_current_user),
    service: FocusService = Depends(get_focus_service),
):
    """Start a focus timer on a task"""
    return timer_response(service.start_timer(current_user, data.taskId))


@router.post("/end", response_model=TimerResponse)
def end_timer(
    data: Optional[EndTimerRequest] = None,
    current_user: User = Depends(get_current_user),
    service: FocusService = Depends(get_focus_service),
):
    """End a timer by id, or the caller's running timer"""
    timer_id = data.timerId if data else None
    return timer_response(service.end_timer(current_user, timer_id))


@router.get("/active", response_model=list[ActiveTimerResponse])
def get_active_timers(
    current_user: User = Depends(get_current_user),
    service: FocusService = Depends(get_focus_service),
    teamId: Optional[str] = Query(None, description="Team whose running timers to list"),
):
    """Running timers on a team, newest first"""
    return service.list_active_timers(current_user, teamId)


@router.get("/current", response_model=Optional[TimerResponse])
def get_current_timer(
    current_user: User = Depends(get_current_user),
    service: FocusService = Depends(get_focus_service),
):
    timer = service.get_current_timer(current_user)
    return timer_response(timer) if timer else None


# ============================================================================
# FOCUS LOGS
# ============================================================================


@router.get("", response_model=list[FocusLogResponse])
def get_focus_logs(
    current_user: User = Depends(get_current_user),
    service: FocusService = Depends(get_focus_service),
):
    """Caller's focus logs, newest first"""
    return [focus_log_response(log) for log in service.get_focus_logs(current_user)]


@router.post("/logs/start", response_model=FocusLogResponse, status_code=201)
def start_focus_log(
    current_user: User = Depends(get_current_user),
    service: FocusService = Depends(get_focus_service),
):
    return focus_log_response(service.start_focus_log(current_user))


@router.post("/logs/{log_id}/end", response_model=FocusLogResponse)
def end_focus_log(
    log_id: str,
    current_user: User = Depends(get_current_user),
    service: FocusService = Depends(get_focus_service),
):
    return focus_log_response(service.end_focus_log(current_user, log_id))


# ============================================================================
# ANALYTICS
# ============================================================================


@router.get("/summary", response_model=FocusSummaryResponse)
def get_focus_summary(
    current_user: User = Depends(get_current_user),
    service: FocusService = Depends(get_focus_service),
    days: int = Query(7, ge=1, le=MAX_SUMMARY_DAYS, description="Look-back window in days"),
    since: Optional[datetime] = Query(None, description="Explicit window start; overrides days"),
):
    """Focus totals with daily and ISO-week breakdowns"""
    now = service.clock()
    start = to_naive_utc(since) if since else now - timedelta(days=days)
    return FocusAnalytics(service.db, clock=service.clock).summary(current_user.id, start, until=now)
