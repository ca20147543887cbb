"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system are timezone-aware UTC. Analytics
buckets (day, month) are computed in UTC as well.
"""

from datetime import UTC, date, datetime, time, timedelta


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def start_of_day(d: date) -> datetime:
    """Midnight UTC at the start of d."""
    return datetime.combine(d, time.min, tzinfo=UTC)


def end_of_day(d: date) -> datetime:
    """Last representable instant of d in UTC (inclusive range end)."""
    return start_of_day(d) + timedelta(days=1) - timedelta(microseconds=1)


def bucket_label(dt: datetime, grouping: str) -> str:
    """Return the bucket label for dt: ``YYYY-MM-DD`` for day, ``YYYY-MM`` for month."""
    utc = ensure_utc(dt)
    assert utc is not None
    if grouping == "month":
        return utc.strftime("%Y-%m")
    return utc.strftime("%Y-%m-%d")
