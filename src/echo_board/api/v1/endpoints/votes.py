# src/echo_board/api/v1/endpoints/votes.py
"""Vote and bookmark endpoints for the Echo Board API."""

from fastapi import APIRouter

from echo_board.api.v1.dependencies import (
    ActiveIdentityDep,
    BookmarkLedgerDep,
    VoteLedgerDep,
)
from echo_board.schemas.post import BookmarkResult
from echo_board.schemas.vote import VoteCreate, VoteResult

router = APIRouter(prefix="/posts", tags=["votes"])


@router.post("/{post_id}/vote", response_model=VoteResult)
def cast_vote(
    post_id: str,
    vote_data: VoteCreate,
    voter_id: ActiveIdentityDep,
    votes: VoteLedgerDep,
) -> VoteResult:
    """Cast, switch or withdraw the caller's vote on a post.

    Voting the same direction twice withdraws the vote; voting the other
    direction switches it.
    """
    return votes.cast_vote(post_id, voter_id, vote_data.type)


@router.post("/{post_id}/bookmark", response_model=BookmarkResult)
def toggle_bookmark(
    post_id: str,
    user_id: ActiveIdentityDep,
    bookmarks: BookmarkLedgerDep,
) -> BookmarkResult:
    """Bookmark a post, or remove the bookmark if it already exists."""
    return BookmarkResult(bookmarked=bookmarks.toggle_bookmark(post_id, user_id))
