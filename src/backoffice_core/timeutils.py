"""Wall-clock and calendar helpers.

Times of day travel through the package as ``"HH:MM"`` strings, exactly as
operators type them. Shift durations assume a shift crosses midnight at most
once and never lasts 24 hours or more.

Examples:
    >>> time_to_minutes("17:30")
    1050
    >>> duration_minutes("17:00", "01:00")
    480

"""

from __future__ import annotations

import calendar
from datetime import date, datetime

MINUTES_PER_DAY = 24 * 60


def time_to_minutes(value: str | None) -> int:
    """Convert an ``"HH:MM"`` string into minutes since midnight.

    Empty input returns 0; callers are expected to check for empty strings
    themselves.

    Raises:
        ValueError: If a non-empty value is not of the form ``HH:MM``.

    """
    if not value:
        return 0
    parts = value.strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Time must be HH:MM, got {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    return hours * 60 + minutes


def duration_minutes(start: str | None, end: str | None) -> int:
    """Elapsed minutes from ``start`` to ``end``, rolling over midnight once.

    Raises:
        ValueError: If either value is malformed (see ``time_to_minutes``).

    """
    start_min = time_to_minutes(start)
    end_min = time_to_minutes(end)
    if end_min < start_min:
        end_min += MINUTES_PER_DAY
    return end_min - start_min


def parse_date(s: str) -> date:
    """Parse a date string in YYYY-MM-DD format.

    Raises:
        ValueError: If the date string is not in YYYY-MM-DD format.

    Examples:
        >>> parse_date("2025-03-24")
        datetime.date(2025, 3, 24)

    """
    return datetime.strptime(s, "%Y-%m-%d").date()


def month_window(year: int, month: int) -> tuple[date, date]:
    """Return the first and last calendar day of a month (both inclusive)."""
    _, num_days = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, num_days)


def as_date(value: date | datetime) -> date:
    """Drop the time part of a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until(target: date | datetime, today: date | datetime) -> int:
    """Signed number of calendar days from ``today`` to ``target``."""
    return (as_date(target) - as_date(today)).days


def clock(now: datetime) -> str:
    """Format the wall-clock part of ``now`` as ``HH:MM``."""
    return now.strftime("%H:%M")
