# src/echo_board/db/time.py
"""Time utilities for stored records."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes from legacy snapshots as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
