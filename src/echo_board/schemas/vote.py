# src/echo_board/schemas/vote.py
"""Vote-related Pydantic schemas."""

from pydantic import Field

from echo_board.models import VoteDirection

from .common import CamelModel


class VoteCreate(CamelModel):
    """Schema for casting a vote.

    `type` is validated by the vote ledger, which reports a bad direction
    as an invalid argument.
    """

    type: str = Field("", description='"up" or "down"')


class VoteResult(CamelModel):
    """Tallies of a post right after a vote was applied."""

    success: bool = True
    upvotes: int
    downvotes: int
    net_votes: int
    milestone: str | None = None
    user_vote: VoteDirection | None = None
