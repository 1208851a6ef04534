# tests/v1/test_posts.py
from fastapi import status

from tests.conftest import ALICE, ALICE_HEADERS, BOB_HEADERS

POSTS_URL = "/api/v1/posts"


def _create(client, content: str = "Hello #world", headers=ALICE_HEADERS) -> dict:
    response = client.post(POSTS_URL, json={"content": content, "tags": ["misc"]}, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def test_create_post_success(client) -> None:
    """Creating a post returns the stored record."""
    post = _create(client)

    assert post["content"] == "Hello #world"
    assert post["tags"] == ["misc"]
    assert post["ownerId"] == ALICE
    assert 0 <= post["color"] < 5
    assert "timestamp" in post


def test_create_post_validation(client) -> None:
    """Blank and overlong content are rejected with 400."""
    for content in ["", "   ", "x" * 1001]:
        response = client.post(POSTS_URL, json={"content": content}, headers=ALICE_HEADERS)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "detail" in response.json()

    assert client.get(POSTS_URL, headers=ALICE_HEADERS).json() == []


def test_list_posts_is_viewer_specific(client) -> None:
    post = _create(client)
    client.post(f"{POSTS_URL}/{post['id']}/vote", json={"type": "up"}, headers=BOB_HEADERS)

    [as_alice] = client.get(POSTS_URL, headers=ALICE_HEADERS).json()
    [as_bob] = client.get(POSTS_URL, headers=BOB_HEADERS).json()

    assert as_alice["isOwner"] is True
    assert as_alice["userVote"] is None
    assert as_bob["isOwner"] is False
    assert as_bob["userVote"] == "up"
    assert as_bob["netVotes"] == 1
    assert as_bob["hashtags"] == ["#world"]
    assert "ownerId" not in as_bob


def test_delete_own_post(client) -> None:
    post = _create(client)
    client.post(f"{POSTS_URL}/{post['id']}/comments", json={"content": "hi"}, headers=BOB_HEADERS)

    response = client.delete(f"{POSTS_URL}/{post['id']}", headers=ALICE_HEADERS)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["success"] is True
    assert client.get(POSTS_URL, headers=ALICE_HEADERS).json() == []


def test_delete_someone_elses_post_forbidden(client) -> None:
    post = _create(client)

    response = client.delete(f"{POSTS_URL}/{post['id']}", headers=BOB_HEADERS)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert len(client.get(POSTS_URL, headers=ALICE_HEADERS).json()) == 1


def test_delete_missing_post(client) -> None:
    response = client.delete(f"{POSTS_URL}/missing", headers=ALICE_HEADERS)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_add_comment(client) -> None:
    post = _create(client)

    response = client.post(
        f"{POSTS_URL}/{post['id']}/comments",
        json={"content": "  Great post!  "},
        headers=BOB_HEADERS,
    )

    assert response.status_code == status.HTTP_201_CREATED
    comment = response.json()
    assert comment["content"] == "Great post!"
    assert comment["postId"] == post["id"]

    [view] = client.get(POSTS_URL, headers=ALICE_HEADERS).json()
    assert view["commentCount"] == 1


def test_add_comment_errors(client) -> None:
    post = _create(client)

    too_long = client.post(
        f"{POSTS_URL}/{post['id']}/comments", json={"content": "y" * 501}, headers=BOB_HEADERS
    )
    missing = client.post(f"{POSTS_URL}/missing/comments", json={"content": "hi"}, headers=BOB_HEADERS)

    assert too_long.status_code == status.HTTP_400_BAD_REQUEST
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_report_post(client, store) -> None:
    post = _create(client)

    with_reason = client.post(
        f"{POSTS_URL}/{post['id']}/report", json={"reason": "spam"}, headers=BOB_HEADERS
    )
    without_body = client.post(f"{POSTS_URL}/{post['id']}/report", headers=BOB_HEADERS)

    assert with_reason.status_code == status.HTTP_200_OK
    assert without_body.status_code == status.HTTP_200_OK
    reasons = sorted(report.reason for report in store.load().reports)
    assert reasons == ["No reason provided", "spam"]


def test_banned_identity_cannot_post(client, posts) -> None:
    posts.ban_identity(ALICE)

    response = client.post(POSTS_URL, json={"content": "hello"}, headers=ALICE_HEADERS)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Your account has been banned"


def test_banned_identity_can_still_read(client, posts) -> None:
    _create(client, headers=BOB_HEADERS)
    posts.ban_identity(ALICE)

    response = client.get(POSTS_URL, headers=ALICE_HEADERS)

    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()) == 1
