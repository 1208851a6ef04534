# src/echo_board/api/v1/endpoints/posts.py
"""Post-related endpoints for the Echo Board API."""

from fastapi import APIRouter, status

from echo_board.api.v1.dependencies import (
    ActiveIdentityDep,
    AggregationDep,
    IdentityDep,
    PostManagerDep,
)
from echo_board.models import Comment, Post
from echo_board.schemas.common import ActionResult
from echo_board.schemas.post import CommentCreate, PostCreate, PostView, ReportCreate

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostView])
def list_posts(viewer_id: IdentityDep, aggregation: AggregationDep) -> list[PostView]:
    """List every post enriched for the caller, best voted first."""
    return aggregation.list_posts(viewer_id)


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    owner_id: ActiveIdentityDep,
    posts: PostManagerDep,
) -> Post:
    """Create a new post owned by the caller.

    Args:
        post_data: Text, tags and media descriptors returned by ``/upload``
        owner_id: Identity fingerprint of the caller
        posts: Lifecycle service

    Returns:
        The stored post
    """
    return posts.create_post(post_data.content, post_data.tags, post_data.media, owner_id)


@router.delete("/{post_id}", response_model=ActionResult)
def delete_post(
    post_id: str,
    requester_id: ActiveIdentityDep,
    posts: PostManagerDep,
) -> ActionResult:
    """Delete one of the caller's own posts with everything attached to it."""
    posts.delete_post(post_id, requester_id, is_admin=False)
    return ActionResult()


@router.post(
    "/{post_id}/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    post_id: str,
    comment_data: CommentCreate,
    author_id: ActiveIdentityDep,
    posts: PostManagerDep,
) -> Comment:
    """Append a comment to a post."""
    return posts.add_comment(post_id, comment_data.content, author_id)


@router.post("/{post_id}/report", response_model=ActionResult)
def report_post(
    post_id: str,
    reporter_id: ActiveIdentityDep,
    posts: PostManagerDep,
    report_data: ReportCreate | None = None,
) -> ActionResult:
    """Flag a post for admin review."""
    posts.submit_report(post_id, reporter_id, report_data.reason if report_data else None)
    return ActionResult()
