"""Records for the ways identities interact with a post."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from echo_board.db.time import utcnow

from .base import Record

DEFAULT_REPORT_REASON = "No reason provided"


class VoteDirection(str, Enum):
    """Direction of a vote; the on-disk values are "up" and "down"."""

    UP = "up"
    DOWN = "down"


class ReportStatus(str, Enum):
    """Moderation state of a report."""

    PENDING = "pending"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class Comment(Record):
    """Append-only reply attached to a post."""

    id: str
    post_id: str = Field(alias="postId")
    content: str
    created_at: datetime = Field(default_factory=utcnow, alias="timestamp")


class Vote(Record):
    """Vote of one identity on one post.

    (post_id, voter_id) identifies the row; the ledger keeps it unique.
    """

    post_id: str = Field(alias="postId")
    voter_id: str = Field(alias="voterId")
    direction: VoteDirection = Field(alias="type")
    timestamp: datetime = Field(default_factory=utcnow)


class Bookmark(Record):
    """Bookmark of one identity on one post, unique per (post_id, user_id)."""

    post_id: str = Field(alias="postId")
    user_id: str = Field(alias="userId")
    timestamp: datetime = Field(default_factory=utcnow)


class Report(Record):
    """Report filed against a post; only admins change its status."""

    id: str
    post_id: str = Field(alias="postId")
    reported_by: str = Field(alias="reportedBy")
    reason: str = DEFAULT_REPORT_REASON
    # Snapshots written before reports were triaged carry no status.
    status: ReportStatus = ReportStatus.PENDING
    timestamp: datetime = Field(default_factory=utcnow)
