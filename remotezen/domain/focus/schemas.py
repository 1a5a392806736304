"""Focus domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import clean_optional_text, validate_required_text


class StartTimerRequest(BaseModel):
    taskId: str

    @field_validator("taskId")
    @classmethod
    def validate_task_id(cls, v):
        return validate_required_text(v, "Task ID")


class EndTimerRequest(BaseModel):
    """timerId is optional; without it the caller's running timer is ended"""

    timerId: Optional[str] = None

    @field_validator("timerId")
    @classmethod
    def validate_timer_id(cls, v):
        return clean_optional_text(v)


class TaskRef(BaseModel):
    id: str
    title: str


class TimerResponse(BaseModel):
    """Durations are in whole seconds"""

    id: str
    userId: str
    taskId: str
    startedAt: datetime
    endedAt: Optional[datetime] = None
    durationSeconds: Optional[int] = None
    task: Optional[TaskRef] = None


class ActiveTimerResponse(BaseModel):
    id: str
    userId: str
    userName: Optional[str] = None
    userEmail: Optional[str] = None
    taskId: str
    taskTitle: str
    startedAt: datetime
    elapsedSeconds: int


class FocusLogResponse(BaseModel):
    """Durations are in whole minutes (floor of the timer's seconds / 60)"""

    id: str
    userId: str
    timerId: Optional[str] = None
    startTime: datetime
    endTime: Optional[datetime] = None
    durationMinutes: Optional[int] = None


class DailyFocus(BaseModel):
    date: date
    focusSeconds: int
    focusMinutes: int
    sessionCount: int
    productivityScore: int


class WeeklyFocus(BaseModel):
    week: str  # ISO week, e.g. 2026-W42
    focusSeconds: int
    sessionCount: int


class FocusSummaryResponse(BaseModel):
    since: datetime
    totalFocusSeconds: int
    sessionCount: int
    daily: list[DailyFocus] = []
    weekly: list[WeeklyFocus] = []
