"""Tests for hot score and ranking endpoints."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status


def test_calculate_hot_score(client) -> None:
    response = client.post(
        "/api/v1/posts/hot-score",
        json={"upvotes": 10, "downvotes": 0, "created_at": "2024-01-01T12:30:00Z"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["hot_score"] == pytest.approx(1.0 + 45000 / 45000)


@pytest.mark.parametrize(
    "payload",
    [
        {"downvotes": 0, "created_at": "2024-01-01T00:00:00Z"},
        {"upvotes": -1, "downvotes": 0, "created_at": "2024-01-01T00:00:00Z"},
        {"upvotes": 1.5, "downvotes": 0, "created_at": "2024-01-01T00:00:00Z"},
        {"upvotes": 1, "downvotes": 0, "created_at": "not-a-date"},
        {"upvotes": 1, "downvotes": 0},
    ],
)
def test_calculate_hot_score_validation(client, payload) -> None:
    response = client.post("/api/v1/posts/hot-score", json=payload)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_issue_anonymous_id(client) -> None:
    first = client.get("/api/v1/posts/anonymous-id").json()["anonymous_id"]
    second = client.get("/api/v1/posts/anonymous-id").json()["anonymous_id"]
    assert first and second and first != second


def test_hot_feed_follows_votes(client, make_post, author) -> None:
    base = datetime(2025, 1, 1, tzinfo=UTC)
    older = make_post(author, created_at=base, title="older")
    newer = make_post(author, created_at=base + timedelta(hours=1), title="newer")

    titles = [p["title"] for p in client.get("/api/v1/posts/hot").json()]
    assert titles == ["newer", "older"]

    # Ten net upvotes are worth 45000 seconds, far more than the one hour gap.
    for i in range(10):
        client.post(f"/api/v1/votes/posts/{older.id}", json={"value": 1, "anonymous_id": f"fp-{i}"})

    ranked = client.get("/api/v1/posts/hot", params={"limit": 1}).json()
    assert [p["title"] for p in ranked] == ["older"]
    assert ranked[0]["score"] == 10
    assert newer.id != older.id


def test_hot_feed_limit_bounds(client) -> None:
    assert client.get("/api/v1/posts/hot", params={"limit": 0}).status_code == 422
    assert client.get("/api/v1/posts/hot", params={"limit": 51}).status_code == 422
