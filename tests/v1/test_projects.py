# tests/v1/test_projects.py
"""Tests for owner-facing project endpoints."""

from fastapi import status

from showcase.core.security import create_access_token


def _payload(**overrides):
    payload = {
        "title": "Recipe Finder",
        "url": "https://recipes.example.com",
        "description": "Search recipes by what is in your fridge",
        "tech_stack": ["Vue", "Firebase"],
        "owner_name": "Dana",
    }
    payload.update(overrides)
    return payload


def test_submit_project(client, auth_token) -> None:
    """Publishing returns the project with a share link."""
    response = client.post("/api/v1/projects/", json=_payload(), headers=auth_token)
    assert response.status_code == status.HTTP_201_CREATED

    data = response.json()
    assert data["title"] == "Recipe Finder"
    assert data["status"] == "active"
    assert data["total_reviews"] == 0
    assert data["average_rating"] == 0.0
    assert len(data["share_code"]) == 8
    assert data["share_link"].endswith(f"/review/{data['share_code']}")


def test_submit_project_requires_auth(client) -> None:
    response = client.post("/api/v1/projects/", json=_payload())
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_submit_project_rejects_bad_token(client) -> None:
    response = client.post(
        "/api/v1/projects/",
        json=_payload(),
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_submit_project_rejects_expired_token(client) -> None:
    token = create_access_token("owner-1", expires_minutes=-1)
    response = client.post(
        "/api/v1/projects/",
        json=_payload(),
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_submit_project_validation(client, auth_token) -> None:
    response = client.post(
        "/api/v1/projects/",
        json=_payload(title="", url="mailto:someone@example.com"),
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
    detail = response.json()["detail"]
    assert set(detail) == {"title", "url"}


def test_dashboard_lists_active_projects(client, auth_token, make_project) -> None:
    make_project(total_reviews=2, average_rating=8.0)
    make_project(status="archived")
    make_project(owner_id="owner-2")

    response = client.get("/api/v1/projects/mine", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_projects"] == 1
    assert data["total_reviews"] == 2
    assert data["average_rating"] == 8.0
    assert data["projects"][0]["share_link"]


def test_share_page_is_owner_only(client, auth_token, other_auth_token, test_project) -> None:
    own = client.get(f"/api/v1/projects/share/{test_project.share_code}", headers=auth_token)
    assert own.status_code == status.HTTP_200_OK
    assert own.json()["views"] == 0

    foreign = client.get(f"/api/v1/projects/share/{test_project.share_code}", headers=other_auth_token)
    assert foreign.status_code == status.HTTP_404_NOT_FOUND


def test_archive_project(client, auth_token, other_auth_token, test_project) -> None:
    forbidden = client.post(f"/api/v1/projects/{test_project.id}/archive", headers=other_auth_token)
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    response = client.post(f"/api/v1/projects/{test_project.id}/archive", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "archived"

    dashboard = client.get("/api/v1/projects/mine", headers=auth_token).json()
    assert dashboard["total_projects"] == 0


def test_archive_missing_project(client, auth_token) -> None:
    response = client.post("/api/v1/projects/99999/archive", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
