"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import re
from datetime import date, datetime, time, timedelta, timezone

from planner.backend.core.exceptions import ValidationError

_BARE_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{2})$")

END_OF_DAY = time(23, 59, 59, 999000)


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware or naive datetime to naive UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_api_instant(value: datetime) -> datetime:
    """
    Normalize an incoming instant to naive UTC at millisecond precision.

    Day bounds end at .999, so sub-millisecond digits would let an instant
    fall between two days.
    """
    value = to_naive_utc(value)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def isoformat_utc(value: datetime) -> str:
    """
    Render a stored datetime as an ISO-8601 UTC string.

    Millisecond precision with a trailing "Z", e.g. 2024-03-15T23:59:59.999Z.
    """
    value = to_naive_utc(value)
    return value.isoformat(timespec="milliseconds") + "Z"


def day_key(value: datetime) -> str:
    """Calendar day (YYYY-MM-DD, UTC) that an instant falls on."""
    return to_naive_utc(value).date().isoformat()


def parse_day(value: str) -> date:
    """
    Parse a day path parameter.

    Accepts a bare YYYY-MM-DD date or a full ISO instant, in which case the
    UTC calendar day of the instant is used.

    Raises:
        ValidationError: If the value is not a date
    """
    try:
        if _BARE_DATE.match(value):
            return date.fromisoformat(value)
        return to_naive_utc(_parse_instant(value)).date()
    except ValueError:
        raise ValidationError(
            "Invalid date",
            details={"date": f"Expected YYYY-MM-DD, got {value!r}"},
        )


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Inclusive UTC bounds of a calendar day: 00:00:00.000 to 23:59:59.999."""
    return datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY)


def month_bounds(year_month: str) -> tuple[datetime, datetime]:
    """
    Inclusive UTC bounds of a YYYY-MM month.

    Raises:
        ValidationError: If the value is not a valid year and month
    """
    match = _YEAR_MONTH.match(year_month)
    if not match or not 1 <= int(match.group(2)) <= 12:
        raise ValidationError(
            "Invalid month",
            details={"yearMonth": f"Expected YYYY-MM, got {year_month!r}"},
        )

    year, month = int(match.group(1)), int(match.group(2))
    try:
        first = date(year, month, 1)
        next_first = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    except ValueError:
        raise ValidationError(
            "Invalid month",
            details={"yearMonth": f"Year out of range in {year_month!r}"},
        )
    last = next_first - timedelta(days=1)
    return datetime.combine(first, time.min), datetime.combine(last, END_OF_DAY)


def parse_range_bound(value: str, field_name: str, end: bool = False) -> datetime:
    """
    Parse a startDate/endDate query parameter into a naive UTC instant.

    A bare YYYY-MM-DD start resolves to that day's first millisecond and a
    bare end resolves to its last millisecond, so a single-day range covers
    the whole day.

    Raises:
        ValidationError: If the value cannot be parsed
    """
    try:
        if _BARE_DATE.match(value):
            start, finish = day_bounds(date.fromisoformat(value))
            return finish if end else start
        return to_api_instant(_parse_instant(value))
    except ValueError:
        raise ValidationError(
            f"Invalid {field_name}",
            details={field_name: f"Expected an ISO date or datetime, got {value!r}"},
        )


def _parse_instant(value: str) -> datetime:
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
