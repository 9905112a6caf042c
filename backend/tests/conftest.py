import pytest
from fastapi.testclient import TestClient

from bible_tracker.core.config import Settings
from bible_tracker.main import create_app

DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture
def settings():
    # In-memory SQLite shared through a StaticPool; no .env lookups
    return Settings(
        SECRET_KEY="test-secret-key",
        DATABASE_URL="sqlite://",
        PRODUCTION=False,
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def register_user():
    """Register a user through the API and return the response"""
    def _register(client, email="reader@example.com", password=DEFAULT_PASSWORD, **overrides):
        payload = {
            "email": email,
            "password": password,
            "firstName": "Ruth",
            "lastName": "Moab",
            "gender": "FEMALE",
        }
        payload.update(overrides)
        return client.post("/auth/register", json=payload)
    return _register


@pytest.fixture
def login_user():
    def _login(client, email="reader@example.com", password=DEFAULT_PASSWORD, **extra):
        payload = {"email": email, "password": password}
        payload.update(extra)
        return client.post("/auth/login", json=payload)
    return _login


@pytest.fixture
def auth_client(client, register_user, login_user):
    """Client holding a session cookie for reader@example.com"""
    assert register_user(client).status_code == 201
    assert login_user(client).status_code == 200
    return client


@pytest.fixture
def other_client(app, register_user, login_user):
    """Second, independent client logged in as a different user"""
    other = TestClient(app)
    assert register_user(other, email="boaz@example.com", firstName="Boaz", gender="MALE").status_code == 201
    assert login_user(other, email="boaz@example.com").status_code == 200
    return other
