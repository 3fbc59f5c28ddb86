"""Pytest configuration and fixtures."""

import os

# Settings are cached on first import, so configure them before importing the app
os.environ.setdefault("SEED_DEMO_DATA", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_SWEEP_INTERVAL_SECONDS", "3600")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from festival.config import get_settings  # noqa: E402
from festival.main import create_app  # noqa: E402
from festival.models.enums import FilmStatus, Role  # noqa: E402
from festival.services.auth import get_password_hash  # noqa: E402
from festival.services.sessions import SessionManager  # noqa: E402
from festival.services.store import EntityStore  # noqa: E402

TEST_PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture
def store():
    """A fresh, isolated in-memory store for each test."""
    test_store = EntityStore("sqlite://")
    yield test_store
    test_store.dispose()


@pytest.fixture
def session_manager(store):
    return SessionManager(store)


@pytest.fixture
def app(store):
    """An application bound to the test's store."""
    return create_app(get_settings(), store=store)


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(store):
    """Factory creating a user directly in the store."""

    def _make_user(role: Role, email: str | None = None, name: str | None = None):
        return store.create_user(
            email=email or f"{role}-{store.count_users()}@example.com",
            password_hash=get_password_hash(TEST_PASSWORD),
            role=role,
            name=name or f"Test {role.capitalize()}",
        )

    return _make_user


@pytest.fixture
def make_auth_headers(app, make_user):
    """Factory creating a user plus a live session, returned as bearer headers."""

    def _make_auth_headers(role: Role, email: str | None = None) -> AuthHeaders:
        user = make_user(role, email=email)
        session = app.state.sessions.create_session(user.id)
        return AuthHeaders(
            {"Authorization": f"Bearer {session.token}"},
            user_id=user.id,
            email=user.email,
        )

    return _make_auth_headers


@pytest.fixture
def admin_headers(make_auth_headers):
    return make_auth_headers(Role.ADMIN, email="admin@example.com")


@pytest.fixture
def submitter_headers(make_auth_headers):
    return make_auth_headers(Role.SUBMITTER, email="filmmaker@example.com")


@pytest.fixture
def buyer_headers(make_auth_headers):
    return make_auth_headers(Role.BUYER, email="buyer@example.com")


@pytest.fixture
def make_film(store):
    """Factory creating a film directly in the store."""

    def _make_film(submitter_id: str, status: FilmStatus = FilmStatus.APPROVED, **overrides):
        fields = {
            "title": "Sunset Boulevard Dreams",
            "director": "John Filmmaker",
            "synopsis": "A story about dreams and ambition in Hollywood.",
            "duration": 120,
            "genre": "Drama",
        }
        fields.update(overrides)
        return store.create_film(submitter_id=submitter_id, status=status, **fields)

    return _make_film


@pytest.fixture
def film_payload():
    """Valid film submission body."""
    return {
        "title": "Beverly Hills Nights",
        "director": "Sarah Director",
        "synopsis": "A comedy about life in Beverly Hills.",
        "duration": 95,
        "genre": "Comedy",
        "trailerUrl": "https://example.com/trailer",
    }
