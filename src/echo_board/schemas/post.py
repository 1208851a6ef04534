# src/echo_board/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from echo_board.models import Comment, MediaRef, VoteDirection

from .common import CamelModel


class PostCreate(CamelModel):
    """Schema for creating a new post.

    Length limits are enforced by the lifecycle service so every caller gets
    the same error.
    """

    content: str = ""
    tags: list[str] = Field(default_factory=list)
    media: list[MediaRef] = Field(default_factory=list, description="Descriptors from /upload")


class CommentCreate(CamelModel):
    """Schema for adding a comment to a post."""

    content: str = ""


class ReportCreate(CamelModel):
    """Schema for reporting a post."""

    reason: str | None = None


class PostView(CamelModel):
    """A post as seen by one viewer, with every derived field filled in."""

    id: str
    content: str
    tags: list[str]
    media: list[MediaRef]
    created_at: datetime = Field(alias="timestamp")
    color_hint: int = Field(alias="color")
    comments: list[Comment]
    comment_count: int
    upvotes: int
    downvotes: int
    net_votes: int
    user_vote: VoteDirection | None = None
    is_owner: bool = False
    is_bookmarked: bool = False
    hashtags: list[str]


class TrendingPost(CamelModel):
    """Compact entry of the trending list."""

    id: str
    content: str
    tags: list[str]
    media: list[MediaRef]
    created_at: datetime = Field(alias="timestamp")
    color_hint: int = Field(alias="color")
    net_votes: int


class HashtagCount(CamelModel):
    """Number of posts mentioning a hashtag."""

    tag: str
    count: int


class BookmarkResult(CamelModel):
    """Bookmark state after a toggle."""

    success: bool = True
    bookmarked: bool


class UserStats(CamelModel):
    """Activity summary for one identity."""

    posts_count: int
    votes_count: int
    bookmarks_count: int
    total_upvotes: int
    total_downvotes: int
    karma: int


class UploadResult(CamelModel):
    """Descriptors of freshly stored uploads, ready to attach to a post."""

    success: bool = True
    files: list[MediaRef]
