# src/echo_board/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    posts_router,
    trending_router,
    uploads_router,
    votes_router,
)

__all__ = [
    "admin_router",
    "posts_router",
    "trending_router",
    "uploads_router",
    "votes_router",
]
