from __future__ import annotations

from datetime import date, datetime, timezone

SECONDS_PER_DAY = 60 * 60 * 24


def to_utc_naive(value: datetime) -> datetime:
    """Normalize a datetime to UTC and strip tzinfo for naive DATETIME columns."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def coerce_timestamp(value: object) -> datetime | None:
    """
    Best-effort conversion of a stored timestamp to a naive UTC datetime.
    Returns None for anything that cannot be read as an instant.
    """
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return to_utc_naive(datetime.fromisoformat(raw))
        except ValueError:
            return None
    return None


def days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_DAY
