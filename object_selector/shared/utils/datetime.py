"""
UTC datetime utilities for consistent timezone handling.

Stored post dates are UTC. Use these helpers instead of datetime.now() or
datetime.utcnow(), and format_gmt() when a date leaves the service.
"""

from datetime import UTC, datetime

GMT_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

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

    Use at repository/persistence boundaries to normalize datetimes
    (SQLite returns naive values).
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def format_gmt(dt: datetime | None) -> str:
    """Format a datetime as 'YYYY-MM-DD HH:MM:SS' in UTC; None gives the zero date."""
    if dt is None:
        return "0000-00-00 00:00:00"
    utc = dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)
    return utc.strftime(GMT_FORMAT)
