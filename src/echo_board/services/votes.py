"""Vote ledger: one vote per identity and post, with toggle semantics."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from echo_board.core.errors import ForbiddenError, InvalidArgumentError, NotFoundError
from echo_board.db.store import RecordStore
from echo_board.db.time import utcnow
from echo_board.models import Snapshot, Vote, VoteDirection
from echo_board.schemas.vote import VoteResult

logger = logging.getLogger(__name__)

# Net vote counts that earn a post a one-off celebration.
MILESTONES: dict[int, str] = {
    10: "🔥 Hot Post!",
    50: "⚡ Viral!",
    100: "🚀 Legendary!",
}


@dataclass(frozen=True)
class VoteTally:
    """Vote counts of a single post."""

    upvotes: int = 0
    downvotes: int = 0

    @property
    def net_votes(self) -> int:
        return self.upvotes - self.downvotes


def tally_votes(snapshot: Snapshot, post_id: str) -> VoteTally:
    """Count the votes of one post from scratch."""
    upvotes = downvotes = 0
    for vote in snapshot.votes:
        if vote.post_id != post_id:
            continue
        if vote.direction is VoteDirection.UP:
            upvotes += 1
        else:
            downvotes += 1
    return VoteTally(upvotes=upvotes, downvotes=downvotes)


def milestone_reached(previous_net: int, current_net: int) -> str | None:
    """Return the milestone label if `current_net` newly lands on a threshold.

    Staying on a threshold does not re-trigger; leaving and coming back does.
    """
    if current_net == previous_net:
        return None
    return MILESTONES.get(current_net)


def parse_direction(direction: str | VoteDirection) -> VoteDirection:
    try:
        return VoteDirection(direction)
    except ValueError as exc:
        raise InvalidArgumentError("Invalid vote type") from exc


def apply_vote(snapshot: Snapshot, post_id: str, voter_id: str, direction: VoteDirection) -> None:
    """Apply one vote to the snapshot in place.

    Transitions over (existing direction, requested direction):
    same -> delete the vote, opposite -> overwrite it, none -> insert.
    """
    existing = snapshot.find_vote(post_id, voter_id)
    if existing is None:
        snapshot.votes.append(
            Vote(post_id=post_id, voter_id=voter_id, direction=direction, timestamp=utcnow())
        )
    elif existing.direction is direction:
        snapshot.votes.remove(existing)
    else:
        existing.direction = direction


class VoteLedger:
    """Serializes votes through the record store."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def cast_vote(self, post_id: str, voter_id: str, direction: str | VoteDirection) -> VoteResult:
        """Cast, switch or withdraw a vote.

        Args:
            post_id: Post being voted on.
            voter_id: Identity fingerprint of the voter.
            direction: ``"up"`` or ``"down"``.

        Returns:
            Fresh tallies, the caller's resulting vote and any milestone reached.

        Raises:
            InvalidArgumentError: If `direction` is not up or down.
            NotFoundError: If the post does not exist.
            ForbiddenError: If the voter is banned.
        """
        parsed = parse_direction(direction)
        with self.store.transaction() as snapshot:
            if snapshot.find_post(post_id) is None:
                raise NotFoundError("Post not found")
            if snapshot.is_banned(voter_id):
                raise ForbiddenError("Your account has been banned")

            before = tally_votes(snapshot, post_id)
            apply_vote(snapshot, post_id, voter_id, parsed)
            after = tally_votes(snapshot, post_id)
            current = snapshot.find_vote(post_id, voter_id)

        milestone = milestone_reached(before.net_votes, after.net_votes)
        if milestone:
            logger.info("Post %s reached %d net votes", post_id, after.net_votes)
        return VoteResult(
            upvotes=after.upvotes,
            downvotes=after.downvotes,
            net_votes=after.net_votes,
            milestone=milestone,
            user_vote=current.direction if current else None,
        )
