"""Post lifecycle: creation, cascading deletion, comments, bans and reports."""
from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Iterable

from echo_board.core.errors import ForbiddenError, InvalidArgumentError, NotFoundError
from echo_board.db.store import RecordStore
from echo_board.db.time import utcnow
from echo_board.models import (
    COLOR_HINT_COUNT,
    DEFAULT_REPORT_REASON,
    Comment,
    MediaRef,
    Post,
    Report,
    ReportStatus,
    Snapshot,
)
from echo_board.services.media import MediaStorage

logger = logging.getLogger(__name__)

MAX_POST_LENGTH = 1000
MAX_COMMENT_LENGTH = 500
MAX_MEDIA_PER_POST = 5

BANNED_MESSAGE = "Your account has been banned"


def _validated_text(content: str | None, *, limit: int, label: str) -> str:
    """Return trimmed content or raise if it is empty or too long.

    The limit applies to the text as submitted, before trimming.
    """
    if content is None or not content.strip():
        raise InvalidArgumentError(f"{label} is required")
    if len(content) > limit:
        raise InvalidArgumentError(f"{label} must be under {limit} characters")
    return content.strip()


def _ensure_not_banned(snapshot: Snapshot, identity_id: str) -> None:
    if snapshot.is_banned(identity_id):
        raise ForbiddenError(BANNED_MESSAGE)


def _new_id() -> str:
    return str(uuid.uuid4())


class PostLifecycleManager:
    """Owns every mutation that creates or removes posts and their dependents."""

    def __init__(self, store: RecordStore, media_storage: MediaStorage | None = None) -> None:
        self.store = store
        self.media_storage = media_storage

    def create_post(
        self,
        content: str,
        tags: Iterable[str] | None,
        media: Iterable[MediaRef] | None,
        owner_id: str,
    ) -> Post:
        """Validate and persist a new post.

        Raises:
            InvalidArgumentError: If content is empty or over 1000 characters,
                or too many media descriptors are attached.
            ForbiddenError: If `owner_id` is banned.
        """
        text = _validated_text(content, limit=MAX_POST_LENGTH, label="Content")
        media_refs = list(media or [])
        if len(media_refs) > MAX_MEDIA_PER_POST:
            raise InvalidArgumentError(f"A post can carry at most {MAX_MEDIA_PER_POST} files")
        clean_tags = [tag.strip() for tag in tags or [] if tag and tag.strip()]

        with self.store.transaction() as snapshot:
            _ensure_not_banned(snapshot, owner_id)
            post = Post(
                id=_new_id(),
                content=text,
                tags=clean_tags,
                media=media_refs,
                owner_id=owner_id,
                created_at=utcnow(),
                color_hint=random.randrange(COLOR_HINT_COUNT),
            )
            snapshot.posts.insert(0, post)

        logger.info("Created post %s", post.id)
        return post

    def delete_post(self, post_id: str, requester_id: str, is_admin: bool = False) -> Post:
        """Delete a post together with its comments, votes, bookmarks and media.

        Media files are released only after the snapshot is saved, and a file
        that cannot be removed never fails the deletion.

        Raises:
            NotFoundError: If the post does not exist.
            ForbiddenError: If a non-admin requester does not own the post or
                is banned.
        """
        with self.store.transaction() as snapshot:
            post = snapshot.find_post(post_id)
            if post is None:
                raise NotFoundError("Post not found")
            if not is_admin:
                _ensure_not_banned(snapshot, requester_id)
                if post.owner_id != requester_id:
                    raise ForbiddenError("You can only delete your own posts")
            snapshot.remove_post(post_id)

        logger.info("Deleted post %s%s", post_id, " (admin)" if is_admin else "")
        self._release_media(post.media)
        return post

    def add_comment(self, post_id: str, content: str, author_id: str) -> Comment:
        """Append a comment to an existing post.

        Raises:
            InvalidArgumentError: If content is empty or over 500 characters.
            NotFoundError: If the post does not exist.
            ForbiddenError: If the author is banned.
        """
        text = _validated_text(content, limit=MAX_COMMENT_LENGTH, label="Comment")
        with self.store.transaction() as snapshot:
            if snapshot.find_post(post_id) is None:
                raise NotFoundError("Post not found")
            _ensure_not_banned(snapshot, author_id)
            comment = Comment(id=_new_id(), post_id=post_id, content=text, created_at=utcnow())
            snapshot.comments.append(comment)
        return comment

    def ban_identity(
        self,
        identity_id: str,
        cascade_delete_posts: bool = False,
        reason: str | None = None,
    ) -> int:
        """Ban an identity; banning twice is a no-op.

        With `cascade_delete_posts`, every post owned by the identity is
        removed with the same cascade as `delete_post`.

        Returns:
            The number of posts removed.
        """
        if not identity_id or not identity_id.strip():
            raise InvalidArgumentError("voterId is required")

        removed: list[Post] = []
        with self.store.transaction() as snapshot:
            if identity_id not in snapshot.banned:
                snapshot.banned.append(identity_id)
            if cascade_delete_posts:
                owned = [post.id for post in snapshot.posts if post.owner_id == identity_id]
                for post_id in owned:
                    post = snapshot.remove_post(post_id)
                    if post is not None:
                        removed.append(post)

        logger.info(
            "Banned %s (removed %d posts): %s",
            identity_id,
            len(removed),
            reason or "no reason given",
        )
        for post in removed:
            self._release_media(post.media)
        return len(removed)

    def unban_identity(self, identity_id: str) -> None:
        """Lift a ban; unbanning an identity that is not banned is a no-op."""
        if not identity_id or not identity_id.strip():
            raise InvalidArgumentError("voterId is required")
        with self.store.transaction() as snapshot:
            snapshot.banned = [banned for banned in snapshot.banned if banned != identity_id]
        logger.info("Unbanned %s", identity_id)

    def submit_report(self, post_id: str, reporter_id: str, reason: str | None = None) -> Report:
        """File a pending report against a post.

        Raises:
            NotFoundError: If the post does not exist.
            ForbiddenError: If the reporter is banned.
        """
        with self.store.transaction() as snapshot:
            if snapshot.find_post(post_id) is None:
                raise NotFoundError("Post not found")
            _ensure_not_banned(snapshot, reporter_id)
            report = Report(
                id=_new_id(),
                post_id=post_id,
                reported_by=reporter_id,
                reason=(reason or "").strip() or DEFAULT_REPORT_REASON,
                status=ReportStatus.PENDING,
                timestamp=utcnow(),
            )
            snapshot.reports.append(report)
        return report

    def resolve_report(self, report_id: str, new_status: str | ReportStatus) -> Report:
        """Close a report as resolved or dismissed.

        Raises:
            InvalidArgumentError: If `new_status` is not resolved or dismissed.
            NotFoundError: If the report does not exist.
        """
        try:
            status = ReportStatus(new_status)
        except ValueError as exc:
            raise InvalidArgumentError("Invalid report status") from exc
        if status is ReportStatus.PENDING:
            raise InvalidArgumentError("A report can only be resolved or dismissed")

        with self.store.transaction() as snapshot:
            report = snapshot.find_report(report_id)
            if report is None:
                raise NotFoundError("Report not found")
            report.status = status

        logger.info("Report %s marked %s", report_id, status.value)
        return report

    def _release_media(self, media: Iterable[MediaRef]) -> None:
        if self.media_storage is None:
            return
        self.media_storage.delete_all(media)
