from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """Server-side 'now' in UTC (timezone-aware)."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to an aware UTC value.

    Backends without timezone support (SQLite) hand back naive values; those
    are stored as UTC, so naive is interpreted as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_from(start: datetime, days: int) -> datetime:
    return as_utc(start) + timedelta(days=days)
