"""Admin moderation endpoints for the Echo Board API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from echo_board.api.v1.dependencies import AdminDep, AggregationDep, PostManagerDep
from echo_board.core.security import create_admin_token, verify_admin_password
from echo_board.models import Report, ReportStatus
from echo_board.schemas.admin import (
    AdminLogin,
    AdminPostView,
    AdminToken,
    BannedList,
    BanRequest,
    BanResult,
    ResolveReport,
    UnbanRequest,
)
from echo_board.schemas.common import ActionResult

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=AdminToken)
def admin_login(credentials: AdminLogin) -> AdminToken:
    """Exchange the admin password for a short-lived bearer token."""
    if not verify_admin_password(credentials.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin password",
        )
    return AdminToken(token=create_admin_token())


@router.get("/posts", response_model=list[AdminPostView], dependencies=[AdminDep])
def list_admin_posts(aggregation: AggregationDep) -> list[AdminPostView]:
    """List every post with its owner and ban status."""
    return aggregation.admin_posts()


@router.delete("/posts/{post_id}", response_model=ActionResult, dependencies=[AdminDep])
def delete_any_post(post_id: str, posts: PostManagerDep) -> ActionResult:
    """Delete any post regardless of owner."""
    posts.delete_post(post_id, requester_id="admin", is_admin=True)
    return ActionResult()


@router.get("/banned", response_model=BannedList, dependencies=[AdminDep])
def list_banned(aggregation: AggregationDep) -> BannedList:
    return BannedList(banned=aggregation.banned_identities())


@router.post("/ban", response_model=BanResult, dependencies=[AdminDep])
def ban_identity(ban: BanRequest, posts: PostManagerDep) -> BanResult:
    """Ban an identity and optionally remove all of its posts."""
    deleted = posts.ban_identity(ban.voter_id, ban.delete_posts, reason=ban.reason)
    return BanResult(message="User banned", deleted_posts=deleted)


@router.post("/unban", response_model=BanResult, dependencies=[AdminDep])
def unban_identity(unban: UnbanRequest, posts: PostManagerDep) -> BanResult:
    posts.unban_identity(unban.voter_id)
    return BanResult(message="User unbanned")


@router.get("/reports", response_model=list[Report], dependencies=[AdminDep])
def list_reports(
    aggregation: AggregationDep,
    report_status: ReportStatus | None = Query(None, alias="status"),
) -> list[Report]:
    """List reports, newest first, optionally filtered by status."""
    return aggregation.list_reports(report_status)


@router.post("/reports/{report_id}/resolve", response_model=Report, dependencies=[AdminDep])
def resolve_report(
    report_id: str,
    resolution: ResolveReport,
    posts: PostManagerDep,
) -> Report:
    """Mark a report resolved or dismissed."""
    return posts.resolve_report(report_id, resolution.status)
