"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .admin import (
    AdminLogin,
    AdminPostView,
    AdminToken,
    BannedList,
    BanRequest,
    BanResult,
    ResolveReport,
    UnbanRequest,
)
from .common import ActionResult, CamelModel
from .post import (
    BookmarkResult,
    CommentCreate,
    HashtagCount,
    PostCreate,
    PostView,
    ReportCreate,
    TrendingPost,
    UploadResult,
    UserStats,
)
from .vote import VoteCreate, VoteResult

__all__ = [
    "AdminLogin", "AdminPostView", "AdminToken", "BannedList", "BanRequest", "BanResult",
    "ResolveReport", "UnbanRequest",
    "ActionResult", "CamelModel",
    "BookmarkResult", "CommentCreate", "HashtagCount", "PostCreate", "PostView",
    "ReportCreate", "TrendingPost", "UploadResult", "UserStats",
    "VoteCreate", "VoteResult",
]
