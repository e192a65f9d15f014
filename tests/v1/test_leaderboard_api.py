# tests/v1/test_leaderboard_api.py
"""Tests for the leaderboard endpoint."""

from datetime import timedelta

from fastapi import status

from showcase.db.time import utcnow


def test_empty_leaderboard(client) -> None:
    response = client.get("/api/v1/leaderboard")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"window": "all", "total": 0, "podium": [], "rest": []}


def test_short_board_has_no_podium(client, make_project) -> None:
    make_project(total_reviews=1, average_rating=9.0)
    make_project(total_reviews=1, average_rating=8.0)
    make_project()

    data = client.get("/api/v1/leaderboard").json()
    assert data["total"] == 2
    assert data["podium"] == []
    assert [p["average_rating"] for p in data["rest"]] == [9.0, 8.0]


def test_podium_and_rest(client, make_project) -> None:
    for rating in (4.0, 9.0, 7.0, 8.0, 6.0):
        make_project(total_reviews=2, average_rating=rating)

    data = client.get("/api/v1/leaderboard").json()
    assert [p["average_rating"] for p in data["podium"]] == [9.0, 8.0, 7.0]
    assert [p["average_rating"] for p in data["rest"]] == [6.0, 4.0]
    assert "owner_id" not in data["podium"][0]


def test_week_window(client, make_project) -> None:
    now = utcnow()
    make_project(total_reviews=3, average_rating=9.0, created_at=now - timedelta(days=10))
    fresh = make_project(total_reviews=1, average_rating=5.0, created_at=now - timedelta(hours=5))

    data = client.get("/api/v1/leaderboard", params={"window": "week"}).json()
    assert data["window"] == "week"
    assert [p["id"] for p in data["rest"]] == [fresh.id]


def test_limit_and_bad_params(client, make_project) -> None:
    for rating in (5.0, 6.0, 7.0, 8.0):
        make_project(total_reviews=1, average_rating=rating)

    limited = client.get("/api/v1/leaderboard", params={"limit": 2}).json()
    assert limited["total"] == 2

    assert client.get("/api/v1/leaderboard", params={"limit": 0}).status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
    assert client.get("/api/v1/leaderboard", params={"window": "decade"}).status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
