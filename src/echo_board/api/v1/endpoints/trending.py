"""Trending and statistics endpoints for the Echo Board API."""

from fastapi import APIRouter, Query

from echo_board.api.v1.dependencies import AggregationDep, IdentityDep
from echo_board.schemas.post import HashtagCount, TrendingPost, UserStats

router = APIRouter(tags=["trending"])


@router.get("/trending/hashtags", response_model=list[HashtagCount])
def trending_hashtags(
    aggregation: AggregationDep,
    limit: int = Query(10, ge=1, le=100, description="Maximum number of hashtags to return"),
) -> list[HashtagCount]:
    """Return the hashtags mentioned by the most posts."""
    return aggregation.trending_hashtags(limit)


@router.get("/trending", response_model=list[TrendingPost])
def trending_posts(
    aggregation: AggregationDep,
    window_hours: float = Query(24, gt=0, le=24 * 30, description="Look-back window in hours"),
    limit: int = Query(5, ge=1, le=100, description="Maximum number of posts to return"),
) -> list[TrendingPost]:
    """Return the best-voted posts created within the window."""
    return aggregation.trending_posts(window_hours, limit)


@router.get("/stats", response_model=UserStats)
def user_stats(identity: IdentityDep, aggregation: AggregationDep) -> UserStats:
    """Return the caller's activity and karma."""
    return aggregation.user_stats(identity)
