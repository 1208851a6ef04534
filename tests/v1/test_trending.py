# tests/v1/test_trending.py
from fastapi import status

from tests.conftest import ALICE, ALICE_HEADERS, BOB


def test_trending_hashtags(client, posts) -> None:
    posts.create_post("#python rocks", [], [], ALICE)
    posts.create_post("#Python again and #fastapi", [], [], BOB)

    response = client.get("/api/v1/trending/hashtags", params={"limit": 1})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [{"tag": "#python", "count": 2}]


def test_trending_posts(client, posts, votes) -> None:
    quiet = posts.create_post("quiet", [], [], ALICE)
    loud = posts.create_post("loud", [], [], ALICE)
    votes.cast_vote(loud.id, BOB, "up")

    response = client.get("/api/v1/trending")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert [item["id"] for item in body] == [loud.id, quiet.id]
    assert body[0]["netVotes"] == 1


def test_trending_rejects_bad_limit(client) -> None:
    response = client.get("/api/v1/trending", params={"limit": 0})
    assert response.status_code == 422


def test_user_stats(client, posts, votes) -> None:
    post = posts.create_post("mine", [], [], ALICE)
    votes.cast_vote(post.id, BOB, "up")

    response = client.get("/api/v1/stats", headers=ALICE_HEADERS)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "postsCount": 1,
        "votesCount": 0,
        "bookmarksCount": 0,
        "totalUpvotes": 1,
        "totalDownvotes": 0,
        "karma": 1,
    }
