"""Time helpers. All stored timestamps are naive UTC."""

import math
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalise an aware datetime to naive UTC; naive values are assumed UTC already"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds between two instants, floored and never negative (clock skew clamps to 0)"""
    return max(0, math.floor((end - start).total_seconds()))
