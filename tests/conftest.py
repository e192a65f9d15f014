# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from itertools import count
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CLIENT_STORE_BACKEND", "memory")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from showcase.api.v1 import dependencies
from showcase.core.security import create_access_token
from showcase.db.session import Base
from showcase.db.session import get_db as app_get_session
from showcase.db.time import utcnow
from showcase.main import app as fastapi_app
from showcase.models import Project, Review
from showcase.repositories.document_store import SqlDocumentStore
from showcase.services.duplicate_guard import DuplicateGuard, MemoryClientStore

TEST_DB_URL = "sqlite://"
OWNER_ID = "owner-1"
OTHER_OWNER_ID = "owner-2"
VALID_REVIEW_TEXT = (
    "Clean layout, fast load times and a clear README. "
    "The onboarding flow could use one more hint."
)

_SHARE_CODE_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db_session: Session) -> SqlDocumentStore:
    return SqlDocumentStore(db_session)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def client_store() -> MemoryClientStore:
    """A client marker store isolated to one test."""
    return MemoryClientStore()


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    client_store: MemoryClientStore,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[dependencies.get_client_store_dep] = lambda: client_store
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(dependencies.get_client_store_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def guard(client_store: MemoryClientStore) -> DuplicateGuard:
    return DuplicateGuard(client_store, "client-a")


@pytest.fixture()
def other_guard(client_store: MemoryClientStore) -> DuplicateGuard:
    return DuplicateGuard(client_store, "client-b")


@pytest.fixture()
def auth_token() -> dict[str, str]:
    """Return authorization headers for the primary owner."""
    return {"Authorization": f"Bearer {create_access_token(OWNER_ID)}"}


@pytest.fixture()
def other_auth_token() -> dict[str, str]:
    """Return authorization headers for a second owner."""
    return {"Authorization": f"Bearer {create_access_token(OTHER_OWNER_ID)}"}


@pytest.fixture()
def make_project(db_session: Session) -> Callable[..., Project]:
    """Return a factory persisting projects with overridable fields."""

    def _make(**overrides: Any) -> Project:
        index = next(_SHARE_CODE_COUNTER)
        fields: dict[str, Any] = {
            "share_code": f"code{index:04d}",
            "title": f"Project {index}",
            "description": "A small portfolio project",
            "url": "https://example.com/project",
            "tech_stack": ["Python"],
            "owner_id": OWNER_ID,
            "status": "active",
            "views": 0,
            "total_reviews": 0,
            "average_rating": 0.0,
            "created_at": utcnow(),
        }
        fields.update(overrides)
        project = Project(**fields)
        db_session.add(project)
        db_session.commit()
        db_session.refresh(project)
        return project

    return _make


@pytest.fixture()
def make_review(db_session: Session) -> Callable[..., Review]:
    """Return a factory persisting reviews with overridable fields."""

    def _make(project: Project, created_at: datetime | None = None, **overrides: Any) -> Review:
        fields: dict[str, Any] = {
            "project_id": project.id,
            "rating": 7,
            "text": VALID_REVIEW_TEXT,
            "helpful_count": 0,
            "flag_count": 0,
            "status": "published",
            "fingerprint_hash": "f" * 64,
            "created_at": created_at or utcnow(),
        }
        fields.update(overrides)
        review = Review(**fields)
        db_session.add(review)
        db_session.commit()
        db_session.refresh(review)
        return review

    return _make


@pytest.fixture()
def test_project(make_project: Callable[..., Project]) -> Project:
    """A baseline active project with no reviews."""
    return make_project(share_code="abcd1234", title="Portfolio Site")
