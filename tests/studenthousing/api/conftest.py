"""
Fixtures for API tests.

Each test gets a fresh in-memory database shared across the TestClient's
worker threads.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.studenthousing.api.dependencies import get_db
from src.studenthousing.api.main import app
from src.studenthousing.db.base import Base

PASSWORD = "secret"


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(test_engine):
    TestingSession = sessionmaker(bind=test_engine, autocommit=False, autoflush=False, expire_on_commit=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _lister_body(username, name, email, password):
    return {
        "username": username,
        "password": password,
        "name": name,
        "contactInfo": {"email": email, "preferredContact": "email"},
    }


def _listing_body(**overrides):
    body = {
        "distanceFromUniv": 0.5,
        "rent": 1200,
        "description": "Nice place",
        "numberOfRooms": 2,
        "numberOfBathrooms": 1.5,
        "squareFoot": 800,
        "address": "123 Main St, Boston, MA",
        "latitude": 42.34,
        "longitude": -71.09,
    }
    body.update(overrides)
    return body


@pytest.fixture
def listing_body():
    """Factory for a valid camelCase listing body."""
    return _listing_body


@pytest.fixture
def register(client):
    """Factory that registers a lister and returns its auth headers."""

    def _register(username="alice", name="Alice Chen", email=None, password=PASSWORD):
        body = _lister_body(username, name, email or f"{username}@example.com", password)
        response = client.post("/api/listers/listers", json=body)
        assert response.status_code == 201, response.text

        token = client.post("/api/auth/token", data={"username": username, "password": password})
        assert token.status_code == 200, token.text
        return {"Authorization": f"Bearer {token.json()['access_token']}"}

    return _register


@pytest.fixture
def alice(register):
    """Auth headers of the registered lister 'alice'."""
    return register("alice", "Alice Chen")


@pytest.fixture
def bob(register):
    """Auth headers of the registered lister 'bob'."""
    return register("bob", "Bob Diaz")
