"""
Shared fixtures: an isolated in-memory store per test and a TestClient bound to it.

The app's startup hook is never run here, so nothing touches the real
app-data directory or its database file.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from planner.deps import get_session
from planner.main import create_app
from planner.models.base import init_db


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    app = create_app()

    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    return TestClient(app)


@pytest.fixture
def as_user():
    """Headers that make a request act for the given user."""

    def _headers(user_id):
        return {"X-User-Id": user_id}

    return _headers
