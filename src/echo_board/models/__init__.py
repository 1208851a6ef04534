# src/echo_board/models/__init__.py
"""Pydantic records persisted in the Echo Board snapshot."""

from .interaction import (
    DEFAULT_REPORT_REASON,
    Bookmark,
    Comment,
    Report,
    ReportStatus,
    Vote,
    VoteDirection,
)
from .post import COLOR_HINT_COUNT, MediaRef, MediaType, Post
from .snapshot import SCHEMA_VERSION, Snapshot

__all__ = [
    "Bookmark", "Comment", "Report", "ReportStatus", "Vote", "VoteDirection",
    "DEFAULT_REPORT_REASON",
    "MediaRef", "MediaType", "Post", "COLOR_HINT_COUNT",
    "Snapshot", "SCHEMA_VERSION",
]
