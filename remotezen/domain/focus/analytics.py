"""
Focus log aggregator - productivity summaries over completed focus logs.

FocusLog is the source of truth for reporting. Logs store whole minutes, so
totals are durationMinutes x 60 seconds; sub-minute remainders of the original
timer are not recoverable here.
"""

from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import ValidationError
from ...models import FocusLog
from ...shared.timeutils import utcnow
from .repository import FocusRepository

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600

# Longest window a summary may cover, one row per day
MAX_SUMMARY_DAYS = 365


def productivity_score(focus_seconds: int) -> int:
    """One focused hour in a day scores 100"""
    return min(100, round(focus_seconds / SECONDS_PER_HOUR * 100))


def iso_week_label(day: date) -> str:
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


def summarize_logs(logs: Iterable[FocusLog]) -> dict:
    total = 0
    count = 0
    for log in logs:
        if log.duration_minutes is None:
            continue
        total += log.duration_minutes * SECONDS_PER_MINUTE
        count += 1
    return {"totalFocusSeconds": total, "sessionCount": count}


def daily_breakdown(logs: Iterable[FocusLog], start: date, end: date) -> list[dict]:
    """One row per calendar day from start to end inclusive, zero-filled"""
    buckets: dict[date, list[int]] = {}
    for log in logs:
        if log.duration_minutes is None:
            continue
        bucket = buckets.setdefault(log.start_time.date(), [0, 0])
        bucket[0] += log.duration_minutes * SECONDS_PER_MINUTE
        bucket[1] += 1

    rows = []
    day = start
    while day <= end:
        seconds, sessions = buckets.get(day, (0, 0))
        rows.append(
            {
                "date": day,
                "focusSeconds": seconds,
                "focusMinutes": seconds // SECONDS_PER_MINUTE,
                "sessionCount": sessions,
                "productivityScore": productivity_score(seconds),
            }
        )
        day += timedelta(days=1)
    return rows


def weekly_breakdown(daily: list[dict]) -> list[dict]:
    weeks: dict[str, dict] = {}
    for row in daily:
        label = iso_week_label(row["date"])
        week = weeks.setdefault(label, {"week": label, "focusSeconds": 0, "sessionCount": 0})
        week["focusSeconds"] += row["focusSeconds"]
        week["sessionCount"] += row["sessionCount"]
    return list(weeks.values())


class FocusAnalytics:
    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.repo = FocusRepository()
        self.clock = clock or utcnow

    def summarize(self, user_id: str, since: datetime) -> dict:
        """{totalFocusSeconds, sessionCount} over completed logs started at or after `since`"""
        logs = self.repo.get_completed_focus_logs_since(self.db, user_id, since)
        return summarize_logs(logs)

    def summary(self, user_id: str, since: datetime, until: Optional[datetime] = None) -> dict:
        """Totals plus per-day and per-ISO-week breakdowns over at most MAX_SUMMARY_DAYS"""
        until = until or self.clock()
        if since < until - timedelta(days=MAX_SUMMARY_DAYS):
            raise ValidationError(f"since must be within the last {MAX_SUMMARY_DAYS} days")
        logs = self.repo.get_completed_focus_logs_since(self.db, user_id, since)
        daily = daily_breakdown(logs, since.date(), max(until, since).date())
        result = summarize_logs(logs)
        result.update({"since": since, "daily": daily, "weekly": weekly_breakdown(daily)})
        return result
