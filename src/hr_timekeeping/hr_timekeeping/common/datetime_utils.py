from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a naive UTC datetime.

    A trailing ``Z`` or an explicit offset is converted to UTC; a timestamp
    without offset is taken as UTC already.
    """

    v = (value or "").strip()
    if not v:
        raise ValidationError("Timestamp is required")
    if v.endswith(("Z", "z")):
        v = v[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(v)
    except ValueError:
        raise ValidationError(f"Invalid ISO-8601 timestamp: {value!r}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return truncate_to_millis(parsed)


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond digits; event_time is stored as DATETIME(3)."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def format_timestamp(value: datetime) -> str:
    """Render a stored (naive UTC) datetime as ISO-8601 with ``Z``."""
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def day_bounds(start: date | None, end: date | None) -> tuple[datetime | None, datetime | None]:
    """Inclusive datetime bounds covering whole calendar days."""

    lo = datetime.combine(start, time.min) if start else None
    hi = datetime.combine(end, time.max) if end else None
    return lo, hi


def month_bounds(month: int, year: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= int(year) <= 9999:
        raise ValidationError("Year is invalid")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
