"""Shared fixtures: an isolated in-memory store, an API client and session headers."""
from __future__ import annotations

import os
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SEED_DEMO_DATA", "false")

from prylics.database import init_db  # noqa: E402
from prylics.main import app  # noqa: E402
from prylics.services import EntityStore, get_entity_store, set_tag_client  # noqa: E402


@pytest.fixture
def store() -> Iterator[EntityStore]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(bind=engine)
    entity_store = EntityStore(sessionmaker(bind=engine, expire_on_commit=False, future=True))
    yield entity_store
    engine.dispose()


@pytest.fixture
def client(store: EntityStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_entity_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    set_tag_client(None)


@pytest.fixture
def sign_in(client: TestClient) -> Callable[..., dict[str, str]]:
    """Start a session through the identity hand-off and return bearer headers."""

    def _sign_in(uid: str, name: str | None = None, **extra: str) -> dict[str, str]:
        response = client.post(
            "/auth/session",
            json={"uid": uid, "displayName": name or uid.title(), "email": f"{uid}@example.org", **extra},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _sign_in
