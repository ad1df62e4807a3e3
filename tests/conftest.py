"""Shared fixtures: an in-memory database and a TestClient bound to it."""

import os
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Must be set before the package is imported; it bootstraps its database on import.
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

from fastapi.testclient import TestClient  # noqa: E402

from formintake import app  # noqa: E402
from formintake.crud.forms import create_form  # noqa: E402
from formintake.crud.users import create_user  # noqa: E402
from formintake.db.session import Base, get_db  # noqa: E402


@pytest.fixture()
def engine():
    # StaticPool keeps one connection so TestClient worker threads share the same in-memory DB.
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def owner(db_session):
    return create_user(db_session, email="owner@example.com", password="s3cret", name="Owner")


@pytest.fixture()
def published_form(db_session, owner):
    return create_form(
        db_session,
        owner.id,
        {"title": "Feedback", "structure": {"fields": [{"name": "q1"}]}, "status": "published"},
    )


@pytest.fixture()
def draft_form(db_session, owner):
    return create_form(
        db_session,
        owner.id,
        {"title": "Draft", "structure": {"fields": []}},
    )


@pytest.fixture()
def auth_headers(client, owner):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "owner@example.com", "password": "s3cret"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
