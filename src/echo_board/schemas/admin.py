"""Admin-facing Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from echo_board.models import MediaRef, ReportStatus

from .common import CamelModel


class AdminLogin(CamelModel):
    password: str = ""


class AdminToken(CamelModel):
    success: bool = True
    token: str


class BanRequest(CamelModel):
    """Ban an identity, optionally removing everything it posted."""

    voter_id: str = ""
    reason: str | None = None
    delete_posts: bool = False


class UnbanRequest(CamelModel):
    voter_id: str = ""


class BanResult(CamelModel):
    success: bool = True
    message: str
    deleted_posts: int = 0


class BannedList(CamelModel):
    banned: list[str]


class ResolveReport(CamelModel):
    status: ReportStatus = ReportStatus.RESOLVED


class AdminPostView(CamelModel):
    """A post with the moderation details hidden from the public feed."""

    id: str
    content: str
    tags: list[str]
    media: list[MediaRef]
    owner_id: str
    created_at: datetime = Field(alias="timestamp")
    color_hint: int = Field(alias="color")
    comment_count: int
    vote_count: int
    is_banned: bool
