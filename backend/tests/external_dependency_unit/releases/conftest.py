"""Fixtures for exercising the releases API against a real (SQLite) database."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from release_tracker.db.engine.sql_engine import SqlEngine
from release_tracker.db.models import Base
from release_tracker.main import get_application


@pytest.fixture(scope="function")
def sqlite_engine() -> Generator[None, None, None]:
    """Install a fresh in-memory database shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SqlEngine.set_engine(engine)
    try:
        yield
    finally:
        SqlEngine.reset_engine()


@pytest.fixture(scope="function")
def client(sqlite_engine: None) -> TestClient:
    # Not entered as a context manager, the app lifespan would replace the engine
    return TestClient(get_application())


@pytest.fixture(scope="function")
def created_release(client: TestClient) -> dict:
    response = client.post(
        "/api/releases",
        json={"name": "v1.0.0", "date": "2024-01-01T00:00:00.000Z"},
    )
    assert response.status_code == 201
    return response.json()
