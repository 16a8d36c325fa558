"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

import calendar
import math
from datetime import UTC, datetime

_SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12
        - datetime.now(UTC) - correct but verbose

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    # Aware datetime - convert to UTC
    return dt.astimezone(UTC)


def add_months(dt: datetime, months: int) -> datetime:
    """
    Add calendar months to a datetime, clamping the day to the target month.

    Jan 31 + 1 month is Feb 28 (or Feb 29 in a leap year).

    Args:
        dt: Start datetime (timezone is preserved)
        months: Number of months to add (may be negative)

    Returns:
        Shifted datetime
    """
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def days_until(target: datetime, now: datetime) -> int:
    """
    Whole days from now until target, rounded up.

    A target 1 second in the future is 1 day away; a target 1 second in the
    past is 0 days away; a target 1 day and 1 second in the past is -1.

    Args:
        target: Future (or past) instant
        now: Reference instant

    Returns:
        ceil((target - now) / 1 day)
    """
    delta = ensure_utc(target) - ensure_utc(now)
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)
