"""Read-side views derived from a snapshot.

Every public method loads exactly one snapshot and computes all of its
results from it, so a view never mixes two versions of the store.
"""

from __future__ import annotations

import re
from collections import Counter, defaultdict
from datetime import datetime, timedelta

from echo_board.db.store import RecordStore
from echo_board.db.time import utcnow
from echo_board.models import Comment, Report, ReportStatus, Snapshot, VoteDirection
from echo_board.schemas.admin import AdminPostView
from echo_board.schemas.post import HashtagCount, PostView, TrendingPost, UserStats
from echo_board.services.votes import VoteTally

_HASHTAG = re.compile(r"#\w+", re.ASCII)


def extract_hashtags(content: str | None) -> list[str]:
    """Return the distinct lowercase ``#word`` tokens of `content` in order of appearance."""
    if not content:
        return []
    return list(dict.fromkeys(tag.lower() for tag in _HASHTAG.findall(content)))


def _tallies(snapshot: Snapshot) -> dict[str, VoteTally]:
    ups: Counter[str] = Counter()
    downs: Counter[str] = Counter()
    for vote in snapshot.votes:
        if vote.direction is VoteDirection.UP:
            ups[vote.post_id] += 1
        else:
            downs[vote.post_id] += 1
    return {
        post.id: VoteTally(upvotes=ups[post.id], downvotes=downs[post.id])
        for post in snapshot.posts
    }


def build_post_views(snapshot: Snapshot, viewer_id: str) -> list[PostView]:
    """Enrich every post for `viewer_id` and order by net votes, best first.

    Posts with equal net votes keep their stored relative order.
    """
    tallies = _tallies(snapshot)
    comments: dict[str, list[Comment]] = defaultdict(list)
    for comment in snapshot.comments:
        comments[comment.post_id].append(comment)
    own_votes = {
        vote.post_id: vote.direction for vote in snapshot.votes if vote.voter_id == viewer_id
    }
    bookmarked = {
        bookmark.post_id for bookmark in snapshot.bookmarks if bookmark.user_id == viewer_id
    }

    views = []
    for post in snapshot.posts:
        tally = tallies[post.id]
        post_comments = comments.get(post.id, [])
        views.append(
            PostView(
                id=post.id,
                content=post.content,
                tags=post.tags,
                media=post.media,
                created_at=post.created_at,
                color_hint=post.color_hint,
                comments=post_comments,
                comment_count=len(post_comments),
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
                net_votes=tally.net_votes,
                user_vote=own_votes.get(post.id),
                is_owner=post.owner_id == viewer_id,
                is_bookmarked=post.id in bookmarked,
                hashtags=extract_hashtags(post.content),
            )
        )
    views.sort(key=lambda view: view.net_votes, reverse=True)
    return views


def count_hashtags(snapshot: Snapshot, limit: int = 10) -> list[HashtagCount]:
    """Count how many posts mention each hashtag, most used first."""
    counts: Counter[str] = Counter()
    for post in snapshot.posts:
        counts.update(extract_hashtags(post.content))
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [HashtagCount(tag=tag, count=count) for tag, count in ranked[: max(limit, 0)]]


def rank_recent_posts(
    snapshot: Snapshot,
    window_hours: float = 24,
    limit: int = 5,
    now: datetime | None = None,
) -> list[TrendingPost]:
    """Return the best-voted posts created within the last `window_hours`."""
    cutoff = (now or utcnow()) - timedelta(hours=window_hours)
    tallies = _tallies(snapshot)
    recent = [
        TrendingPost(
            id=post.id,
            content=post.content,
            tags=post.tags,
            media=post.media,
            created_at=post.created_at,
            color_hint=post.color_hint,
            net_votes=tallies[post.id].net_votes,
        )
        for post in snapshot.posts
        if post.created_at > cutoff
    ]
    recent.sort(key=lambda post: post.net_votes, reverse=True)
    return recent[: max(limit, 0)]


def summarize_identity(snapshot: Snapshot, identity_id: str) -> UserStats:
    """Compute posting and reputation figures for one identity."""
    owned = {post.id for post in snapshot.posts if post.owner_id == identity_id}
    received_up = received_down = 0
    for vote in snapshot.votes:
        if vote.post_id not in owned:
            continue
        if vote.direction is VoteDirection.UP:
            received_up += 1
        else:
            received_down += 1
    return UserStats(
        posts_count=len(owned),
        votes_count=sum(1 for vote in snapshot.votes if vote.voter_id == identity_id),
        bookmarks_count=sum(1 for b in snapshot.bookmarks if b.user_id == identity_id),
        total_upvotes=received_up,
        total_downvotes=received_down,
        karma=received_up - received_down,
    )


def build_admin_views(snapshot: Snapshot) -> list[AdminPostView]:
    comment_counts = Counter(comment.post_id for comment in snapshot.comments)
    vote_counts = Counter(vote.post_id for vote in snapshot.votes)
    banned = set(snapshot.banned)
    return [
        AdminPostView(
            id=post.id,
            content=post.content,
            tags=post.tags,
            media=post.media,
            owner_id=post.owner_id,
            created_at=post.created_at,
            color_hint=post.color_hint,
            comment_count=comment_counts[post.id],
            vote_count=vote_counts[post.id],
            is_banned=post.owner_id in banned,
        )
        for post in snapshot.posts
    ]


class AggregationEngine:
    """Entry point for every read-only view the API serves."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def list_posts(self, viewer_id: str) -> list[PostView]:
        return build_post_views(self.store.load(), viewer_id)

    def trending_hashtags(self, limit: int = 10) -> list[HashtagCount]:
        return count_hashtags(self.store.load(), limit)

    def trending_posts(self, window_hours: float = 24, limit: int = 5) -> list[TrendingPost]:
        return rank_recent_posts(self.store.load(), window_hours, limit)

    def user_stats(self, identity_id: str) -> UserStats:
        return summarize_identity(self.store.load(), identity_id)

    def admin_posts(self) -> list[AdminPostView]:
        return build_admin_views(self.store.load())

    def banned_identities(self) -> list[str]:
        return list(self.store.load().banned)

    def list_reports(self, status: ReportStatus | None = None) -> list[Report]:
        """Return reports newest first, optionally only those in `status`."""
        reports = self.store.load().reports
        if status is not None:
            reports = [report for report in reports if report.status is status]
        return sorted(reports, key=lambda report: report.timestamp, reverse=True)
