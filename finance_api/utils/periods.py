# finance_api/utils/periods.py
"""
Calendar helpers. Everything is naive UTC, matching what the models store.
"""
from datetime import datetime, timezone
from typing import Optional, Tuple


def utcnow() -> datetime:
    return datetime.utcnow()


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def current_month_range(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Return ``[start, end)`` of the calendar month containing ``now``:
    the 1st at 00:00 and the 1st of the following month at 00:00.
    """
    now = to_naive_utc(now) if now is not None else utcnow()
    start = datetime(now.year, now.month, 1)
    if now.month == 12:
        end = datetime(now.year + 1, 1, 1)
    else:
        end = datetime(now.year, now.month + 1, 1)
    return start, end


def in_current_month(value: datetime, now: Optional[datetime] = None) -> bool:
    start, end = current_month_range(now)
    return start <= to_naive_utc(value) < end
