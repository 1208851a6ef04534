# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from echo_board.api.v1.dependencies import get_media_storage
from echo_board.core.security import create_admin_token
from echo_board.db.session import get_store
from echo_board.db.store import RecordStore
from echo_board.main import app as fastapi_app
from echo_board.models import Post
from echo_board.services.aggregation import AggregationEngine
from echo_board.services.bookmarks import BookmarkLedger
from echo_board.services.identity import resolve_identity
from echo_board.services.media import MediaStorage
from echo_board.services.posts import PostLifecycleManager
from echo_board.services.votes import VoteLedger

# TestClient connects from this host name.
TEST_CLIENT_HOST = "testclient"

ALICE_HEADERS = {"User-Agent": "alice-browser"}
BOB_HEADERS = {"User-Agent": "bob-browser"}


def identity_for(headers: dict[str, str]) -> str:
    """Return the fingerprint the API derives for requests with `headers`."""
    return resolve_identity(TEST_CLIENT_HOST, headers.get("User-Agent"))


ALICE = identity_for(ALICE_HEADERS)
BOB = identity_for(BOB_HEADERS)


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "db.json"


@pytest.fixture()
def store(tmp_path: Path, data_file: Path) -> RecordStore:
    return RecordStore(
        data_file,
        lock_timeout=2.0,
        legacy_banned_path=tmp_path / "data" / "banned.json",
    )


@pytest.fixture()
def media_storage(tmp_path: Path) -> MediaStorage:
    return MediaStorage(
        tmp_path / "uploads",
        max_files=3,
        max_bytes=1024,
        allowed_extensions=["png", "jpg", "mp4", "txt", "pdf"],
    )


@pytest.fixture()
def posts(store: RecordStore, media_storage: MediaStorage) -> PostLifecycleManager:
    return PostLifecycleManager(store, media_storage)


@pytest.fixture()
def votes(store: RecordStore) -> VoteLedger:
    return VoteLedger(store)


@pytest.fixture()
def bookmarks(store: RecordStore) -> BookmarkLedger:
    return BookmarkLedger(store)


@pytest.fixture()
def aggregation(store: RecordStore) -> AggregationEngine:
    return AggregationEngine(store)


@pytest.fixture()
def alice_post(posts: PostLifecycleManager) -> Post:
    """A baseline post owned by Alice."""
    return posts.create_post("Test post content #testing", ["misc"], [], ALICE)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_storage_dependencies(
    app: FastAPI,
    store: RecordStore,
    media_storage: MediaStorage,
) -> Iterator[None]:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_media_storage] = lambda: media_storage
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_store, None)
        app.dependency_overrides.pop(get_media_storage, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    """Return authorization headers carrying a valid admin token."""
    return {"Authorization": f"Bearer {create_admin_token()}"}
