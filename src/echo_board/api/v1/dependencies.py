"""Shared API dependencies: storage, services, caller identity and admin access."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from echo_board.core.security import is_admin_token
from echo_board.core.settings import settings
from echo_board.db.session import get_store
from echo_board.db.store import RecordStore
from echo_board.services.aggregation import AggregationEngine
from echo_board.services.bookmarks import BookmarkLedger
from echo_board.services.identity import client_address, resolve_identity
from echo_board.services.media import MediaStorage, build_media_storage
from echo_board.services.posts import BANNED_MESSAGE, PostLifecycleManager
from echo_board.services.votes import VoteLedger

# Admin routes read the token themselves so a missing header gets our message.
admin_bearer = HTTPBearer(auto_error=False)

media_storage = build_media_storage()


def get_media_storage() -> MediaStorage:
    """Return the shared upload storage."""
    return media_storage


StoreDep = Annotated[RecordStore, Depends(get_store)]
MediaStorageDep = Annotated[MediaStorage, Depends(get_media_storage)]


def get_identity(request: Request) -> str:
    """Derive the caller's identity fingerprint from the request."""
    address = client_address(
        request.client.host if request.client else None,
        request.headers.get("x-forwarded-for"),
        trust_proxy=settings.trust_forwarded_for,
    )
    return resolve_identity(address, request.headers.get("user-agent"))


IdentityDep = Annotated[str, Depends(get_identity)]


def require_not_banned(identity: IdentityDep, store: StoreDep) -> str:
    """Reject banned callers before any mutation is attempted.

    Services re-check inside their critical section, so a ban that lands
    between this gate and the write is still honoured.
    """
    if store.load().is_banned(identity):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=BANNED_MESSAGE)
    return identity


ActiveIdentityDep = Annotated[str, Depends(require_not_banned)]


def require_admin(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(admin_bearer)],
) -> None:
    """Allow the request only with a valid admin token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    if not is_admin_token(credentials.credentials):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )


def get_vote_ledger(store: StoreDep) -> VoteLedger:
    return VoteLedger(store)


def get_bookmark_ledger(store: StoreDep) -> BookmarkLedger:
    return BookmarkLedger(store)


def get_post_manager(store: StoreDep, media_storage: MediaStorageDep) -> PostLifecycleManager:
    return PostLifecycleManager(store, media_storage)


def get_aggregation(store: StoreDep) -> AggregationEngine:
    return AggregationEngine(store)


VoteLedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger)]
BookmarkLedgerDep = Annotated[BookmarkLedger, Depends(get_bookmark_ledger)]
PostManagerDep = Annotated[PostLifecycleManager, Depends(get_post_manager)]
AggregationDep = Annotated[AggregationEngine, Depends(get_aggregation)]
AdminDep = Depends(require_admin)
