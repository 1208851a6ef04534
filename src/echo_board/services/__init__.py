# src/echo_board/services/__init__.py
"""Business logic services for the Echo Board application."""

from .aggregation import AggregationEngine
from .bookmarks import BookmarkLedger
from .identity import resolve_identity
from .media import MediaStorage
from .posts import PostLifecycleManager
from .votes import VoteLedger

__all__ = [
    "AggregationEngine",
    "BookmarkLedger",
    "MediaStorage",
    "PostLifecycleManager",
    "VoteLedger",
    "resolve_identity",
]
