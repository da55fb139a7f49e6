"""
conftest.py — Shared pytest fixtures for the RoadMaster API test suite.

Every test runs against a private in-memory SQLite database that is dropped
and recreated before each test, through the real FastAPI application.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that the flat
    ``main`` / ``database`` / ``models.*`` imports resolve regardless of where
    pytest is invoked. The database URL is forced before any app import so the
    module-level engine is built for the test database.
"""

import os
import sys

import pytest

_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ.pop("POSTGRES_URL", None)


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema for every test."""
    from database import Base, engine, init_db

    init_db()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    from database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


# ---------------------------------------------------------------------------
# Data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_user(db_session):
    """Insert a user straight into the store and return it."""
    from models.users import User
    from utils.hashing import get_password_hash

    def _make(user_id="u-admin", name="Admin User", email="admin@roadmaster.com", role="Admin", password=None):
        user = User(
            id=user_id,
            name=name,
            email=email,
            role=role,
            avatar="https://ui-avatars.com/api/?name=Admin",
            password=get_password_hash(password) if password else None,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_header():
    """Bearer header for a given user id."""
    from utils.tokenJWT import create_access_token

    def _header(user_id):
        return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}

    return _header


@pytest.fixture
def project(client):
    """A project created with only the required fields."""
    response = client.post(
        "/projects",
        json={"id": "proj-1", "name": "Ring Road Upgrade", "client": "Department of Roads"},
    )
    assert response.status_code == 201
    return response.json()
