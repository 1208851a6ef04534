"""Bookmark ledger."""

from __future__ import annotations

from echo_board.core.errors import ForbiddenError, NotFoundError
from echo_board.db.store import RecordStore
from echo_board.db.time import utcnow
from echo_board.models import Bookmark


class BookmarkLedger:
    """Keeps at most one bookmark per (post, identity)."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def toggle_bookmark(self, post_id: str, user_id: str) -> bool:
        """Flip the bookmark of `user_id` on `post_id`.

        Returns:
            True if the post is bookmarked afterwards, False otherwise.

        Raises:
            NotFoundError: If the post does not exist.
            ForbiddenError: If the identity is banned.
        """
        with self.store.transaction() as snapshot:
            if snapshot.find_post(post_id) is None:
                raise NotFoundError("Post not found")
            if snapshot.is_banned(user_id):
                raise ForbiddenError("Your account has been banned")

            existing = snapshot.find_bookmark(post_id, user_id)
            if existing is not None:
                snapshot.bookmarks.remove(existing)
                return False
            snapshot.bookmarks.append(Bookmark(post_id=post_id, user_id=user_id, timestamp=utcnow()))
            return True
