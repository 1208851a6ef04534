"""Flat-file snapshot store.

All collections live in one JSON document. Readers load it without locking;
every read-modify-write goes through `RecordStore.transaction`, which holds a
single process-wide lock so concurrent requests cannot lose each other's
updates. Writes go to a temp file that is atomically renamed over the
target, so a reader always sees a complete snapshot.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
import threading
import time
from collections.abc import Callable, Hashable, Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from echo_board.core.errors import PersistenceError
from echo_board.models import Bookmark, Comment, Post, Report, Snapshot, Vote
from echo_board.models.base import Record

logger = logging.getLogger(__name__)

# Collection name -> (record type, uniqueness key).
_COLLECTIONS: dict[str, tuple[type[Record], Callable[[Any], Hashable]]] = {
    "posts": (Post, lambda post: post.id),
    "comments": (Comment, lambda comment: comment.id),
    "votes": (Vote, lambda vote: (vote.post_id, vote.voter_id)),
    "bookmarks": (Bookmark, lambda bookmark: (bookmark.post_id, bookmark.user_id)),
    "reports": (Report, lambda report: report.id),
}
_DEPENDENT_COLLECTIONS = ("comments", "votes", "bookmarks")


class _UnreadableSnapshotError(Exception):
    """Internal signal that the on-disk snapshot must be reinitialized."""

    def __init__(self, reason: str, *, corrupt: bool) -> None:
        super().__init__(reason)
        self.corrupt = corrupt


class RecordStore:
    """Durable whole-snapshot storage with a single writer lock."""

    def __init__(
        self,
        path: Path | str,
        *,
        lock_timeout: float = 5.0,
        legacy_banned_path: Path | str | None = None,
    ) -> None:
        self.path = Path(path)
        self.lock_timeout = lock_timeout
        self.legacy_banned_path = Path(legacy_banned_path) if legacy_banned_path else None
        self._lock = threading.RLock()

    @contextlib.contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self.lock_timeout):
            raise PersistenceError(
                f"Timed out after {self.lock_timeout}s waiting for the store lock"
            )
        try:
            yield
        finally:
            self._lock.release()

    def load(self) -> Snapshot:
        """Return the current snapshot.

        A missing or unparsable file is replaced by a fresh empty snapshot,
        which is persisted before returning. Corrupt files are moved aside
        first so their contents can be inspected later.
        """
        try:
            return self._read()
        except _UnreadableSnapshotError:
            # Re-check under the lock; another request may have healed it.
            pass

        with self._locked():
            try:
                return self._read()
            except _UnreadableSnapshotError as exc:
                if exc.corrupt:
                    logger.warning("Snapshot %s is unreadable (%s); resetting", self.path, exc)
                    self._quarantine()
                else:
                    logger.info("No snapshot at %s; initializing an empty store", self.path)
                snapshot = Snapshot()
                self._write(snapshot)
                return snapshot

    def save(self, snapshot: Snapshot) -> None:
        """Durably replace the on-disk snapshot with `snapshot`.

        Raises:
            PersistenceError: If the lock cannot be acquired or the write fails.
                The previously saved snapshot is left untouched.
        """
        with self._locked():
            self._write(snapshot)

    @contextlib.contextmanager
    def transaction(self) -> Iterator[Snapshot]:
        """Serialize a read-modify-write cycle.

        The yielded snapshot is saved when the block exits normally and
        discarded if it raises.
        """
        with self._locked():
            snapshot = self.load()
            yield snapshot
            self._write(snapshot)

    def _read(self) -> Snapshot:
        if not self.path.exists():
            raise _UnreadableSnapshotError("file does not exist", corrupt=False)
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise _UnreadableSnapshotError(str(exc), corrupt=True) from exc
        if not isinstance(raw, dict):
            raise _UnreadableSnapshotError("top-level value is not an object", corrupt=True)
        return self._migrate(raw)

    def _write(self, snapshot: Snapshot) -> None:
        payload = json.dumps(snapshot.to_storage(), indent=2, ensure_ascii=False)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            logger.exception("Failed to persist snapshot to %s", self.path)
            raise PersistenceError(f"Could not write snapshot to {self.path}") from exc

    def _quarantine(self) -> None:
        target = self.path.with_name(f"{self.path.name}.corrupt-{int(time.time())}")
        try:
            os.replace(self.path, target)
        except OSError:
            logger.warning("Could not move corrupt snapshot %s aside", self.path, exc_info=True)
        else:
            logger.warning("Moved corrupt snapshot to %s", target)

    def _migrate(self, raw: dict[str, Any]) -> Snapshot:
        """Bring a raw document of any schema version up to `Snapshot`.

        Missing or malformed collections become empty, malformed and duplicate
        records are dropped, and records pointing at posts that no longer
        exist are removed.
        """
        fields: dict[str, Any] = {}
        for name, (model, key) in _COLLECTIONS.items():
            fields[name] = _coerce_records(name, raw.get(name), model, key)

        post_ids = {post.id for post in fields["posts"]}
        for name in _DEPENDENT_COLLECTIONS:
            kept = [record for record in fields[name] if record.post_id in post_ids]
            if len(kept) != len(fields[name]):
                logger.warning(
                    "Dropping %d orphaned %s records", len(fields[name]) - len(kept), name
                )
            fields[name] = kept

        banned = _coerce_identities(raw.get("banned"))
        if not isinstance(raw.get("schemaVersion"), int):
            banned = _merge_identities(banned, self._legacy_banned())
        fields["banned"] = banned
        return Snapshot(**fields)

    def _legacy_banned(self) -> list[str]:
        """Read the ban list older deployments kept in a separate file."""
        path = self.legacy_banned_path
        if path is None or not path.exists():
            return []
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable legacy ban list %s", path, exc_info=True)
            return []
        if not isinstance(raw, dict):
            return []
        return _coerce_identities(raw.get("banned"))


def _coerce_records(
    name: str,
    value: Any,
    model: type[Record],
    key: Callable[[Any], Hashable],
) -> list[Any]:
    if not isinstance(value, list):
        if value is not None:
            logger.warning("Collection %r is not a list; treating it as empty", name)
        return []

    records: list[Any] = []
    seen: set[Hashable] = set()
    for item in value:
        try:
            record = model.model_validate(item)
        except ValidationError as exc:
            logger.warning("Dropping malformed %s record (%d errors)", name, exc.error_count())
            continue
        identity = key(record)
        if identity in seen:
            logger.warning("Dropping duplicate %s record %r", name, identity)
            continue
        seen.add(identity)
        records.append(record)
    return records


def _coerce_identities(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return _merge_identities([], [item for item in value if isinstance(item, str) and item])


def _merge_identities(current: list[str], extra: list[str]) -> list[str]:
    merged = list(current)
    for identity in extra:
        if identity not in merged:
            merged.append(identity)
    return merged
