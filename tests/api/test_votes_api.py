"""Tests for vote-related endpoints."""

from fastapi import status

from forum_votes.api.v1.dependencies import create_access_token


def test_cast_anonymous_upvote(client, post) -> None:
    response = client.post(
        f"/api/v1/votes/posts/{post.id}",
        json={"value": 1, "anonymous_id": "fp-1"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["action"] == "created"
    assert (body["upvotes"], body["downvotes"], body["score"]) == (1, 0, 1)


def test_cast_registered_vote_then_toggle_off(client, post, voter_headers) -> None:
    first = client.post(f"/api/v1/votes/posts/{post.id}", json={"value": -1}, headers=voter_headers)
    second = client.post(f"/api/v1/votes/posts/{post.id}", json={"value": -1}, headers=voter_headers)

    assert first.json()["action"] == "created"
    assert second.json()["action"] == "deleted"
    assert (second.json()["upvotes"], second.json()["downvotes"], second.json()["score"]) == (0, 0, 0)


def test_anonymous_id_overrides_session(client, post, voter_headers) -> None:
    client.post(f"/api/v1/votes/posts/{post.id}", json={"value": 1}, headers=voter_headers)
    response = client.post(
        f"/api/v1/votes/posts/{post.id}",
        json={"value": 1, "anonymous_id": "fp-1"},
        headers=voter_headers,
    )
    assert response.json()["action"] == "created"
    assert response.json()["upvotes"] == 2


def test_vote_on_comment(client, comment) -> None:
    response = client.post(
        f"/api/v1/votes/comments/{comment.id}",
        json={"value": -1, "anonymous_id": "fp-1"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["score"] == -1


def test_vote_without_identity_is_rejected(client, post) -> None:
    response = client.post(f"/api/v1/votes/posts/{post.id}", json={"value": 1})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "anonymous id" in response.json()["detail"]


def test_vote_nonexistent_post(client) -> None:
    response = client.post("/api/v1/votes/posts/99999", json={"value": 1, "anonymous_id": "fp"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Post not found"


def test_vote_invalid_value(client, post) -> None:
    for value in (0, 2, -2):
        response = client.post(
            f"/api/v1/votes/posts/{post.id}",
            json={"value": value, "anonymous_id": "fp"},
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_invalid_token_is_rejected(client, post) -> None:
    response = client.post(
        f"/api/v1/votes/posts/{post.id}",
        json={"value": 1},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_for_unknown_user_is_rejected(client, post) -> None:
    headers = {"Authorization": f"Bearer {create_access_token(424242)}"}
    response = client.post(f"/api/v1/votes/posts/{post.id}", json={"value": 1}, headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_get_my_vote(client, post, voter_headers) -> None:
    url = f"/api/v1/votes/post/{post.id}/mine"
    assert client.get(url, headers=voter_headers).json() == {"value": 0}

    client.post(f"/api/v1/votes/posts/{post.id}", json={"value": -1}, headers=voter_headers)

    assert client.get(url, headers=voter_headers).json() == {"value": -1}
    assert client.get(url, params={"anonymous_id": "fp"}).json() == {"value": 0}


def test_get_vote_by_id(client, post) -> None:
    cast = client.post(f"/api/v1/votes/posts/{post.id}", json={"value": 1, "anonymous_id": "fp"})
    vote_id = cast.json()["vote_id"]

    response = client.get(f"/api/v1/votes/{vote_id}")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["id"] == vote_id
    assert body["target_kind"] == "post"
    assert body["target_id"] == post.id
    assert body["value"] == 1
    assert body["voter_kind"] == "anonymous"

    assert client.get("/api/v1/votes/987654").status_code == status.HTTP_404_NOT_FOUND
