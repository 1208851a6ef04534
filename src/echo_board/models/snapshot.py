"""The whole-store snapshot and lookups over it."""

from __future__ import annotations

from pydantic import Field

from .base import Record
from .interaction import Bookmark, Comment, Report, Vote
from .post import Post

SCHEMA_VERSION = 1


class Snapshot(Record):
    """Every collection of the store, loaded and saved as one document."""

    schema_version: int = Field(default=SCHEMA_VERSION, alias="schemaVersion")
    posts: list[Post] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    votes: list[Vote] = Field(default_factory=list)
    bookmarks: list[Bookmark] = Field(default_factory=list)
    reports: list[Report] = Field(default_factory=list)
    banned: list[str] = Field(default_factory=list)

    def find_post(self, post_id: str) -> Post | None:
        """Return the post with `post_id`, if any."""
        return next((post for post in self.posts if post.id == post_id), None)

    def find_report(self, report_id: str) -> Report | None:
        """Return the report with `report_id`, if any."""
        return next((report for report in self.reports if report.id == report_id), None)

    def find_vote(self, post_id: str, voter_id: str) -> Vote | None:
        return next(
            (v for v in self.votes if v.post_id == post_id and v.voter_id == voter_id),
            None,
        )

    def find_bookmark(self, post_id: str, user_id: str) -> Bookmark | None:
        return next(
            (b for b in self.bookmarks if b.post_id == post_id and b.user_id == user_id),
            None,
        )

    def is_banned(self, identity_id: str) -> bool:
        return identity_id in self.banned

    def remove_post(self, post_id: str) -> Post | None:
        """Remove a post and every comment, vote and bookmark that references it.

        Returns the removed post so the caller can release its media, or None
        when no such post exists.
        """
        post = self.find_post(post_id)
        if post is None:
            return None
        self.posts = [p for p in self.posts if p.id != post_id]
        self.comments = [c for c in self.comments if c.post_id != post_id]
        self.votes = [v for v in self.votes if v.post_id != post_id]
        self.bookmarks = [b for b in self.bookmarks if b.post_id != post_id]
        return post
