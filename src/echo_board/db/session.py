"""Process-wide store configuration."""

from __future__ import annotations

from echo_board.core.settings import settings
from echo_board.db.store import RecordStore

# One instance per process keeps every write behind the same lock.
record_store = RecordStore(
    settings.data_file,
    lock_timeout=settings.store_lock_timeout_seconds,
    legacy_banned_path=settings.legacy_banned_file,
)


def get_store() -> RecordStore:
    """Return the record store for dependency injection."""
    return record_store
