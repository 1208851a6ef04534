# src/echo_board/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .posts import router as posts_router
from .trending import router as trending_router
from .uploads import router as uploads_router
from .votes import router as votes_router

__all__ = [
    "admin_router",
    "posts_router",
    "trending_router",
    "uploads_router",
    "votes_router",
]
