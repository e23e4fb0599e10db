"""
Calendar-day helpers.

Every temporal value in the park core is an immutable ``datetime.date``.
Timestamps are truncated to their calendar day before any comparison.
"""
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Union

DayLike = Union[date, datetime]

DATE_FORMAT = "%Y-%m-%d"


def to_day(value: Optional[DayLike]) -> Optional[date]:
    """
    Truncate a date or timestamp to its calendar day.

    Aware timestamps are bucketed in UTC, i.e. the same 24-hour bucket
    counted from the epoch. Naive timestamps keep their own date.

    Args:
        value: A date, a datetime or None

    Returns:
        The calendar day, or None when value is None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).date()
        return value.date()
    return value


def same_day(first: Optional[DayLike], second: Optional[DayLike]) -> bool:
    """Check if two timestamps fall on the same calendar day."""
    if first is None or second is None:
        return False
    return to_day(first) == to_day(second)


def days_in_range(start: Optional[DayLike], end: Optional[DayLike]) -> List[date]:
    """
    Get every calendar day in an inclusive range.

    Returns:
        List of days from start to end, empty if start is after end
    """
    first = to_day(start)
    last = to_day(end)
    if first is None or last is None or first > last:
        return []

    days = []
    current = first
    while current <= last:
        days.append(current)
        current += timedelta(days=1)
    return days


def parse_day(
    text: Optional[str],
    null_token: str = "null",
    fmt: str = DATE_FORMAT
) -> Optional[date]:
    """Parse a ``yyyy-MM-dd`` field; empty or null tokens become None."""
    if text is None:
        return None
    text = str(text).strip()
    if not text or text == null_token:
        return None
    return datetime.strptime(text, fmt).date()


def format_day(
    value: Optional[DayLike],
    null_token: str = "null",
    fmt: str = DATE_FORMAT
) -> str:
    """Format a day as ``yyyy-MM-dd`` (null token for None)."""
    day = to_day(value)
    if day is None:
        return null_token
    return day.strftime(fmt)
