"""Pytest fixtures for backend tests."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Generator
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from partydrop.config import Settings
from partydrop.core.security import create_access_token, hash_password
from partydrop.core.session import SESSION_COOKIE_NAME
from partydrop.database import Base, init_db
from partydrop.main import create_app
from partydrop.models.user import User


def build_settings(tmp_path: Path, **overrides) -> Settings:
    """Settings for a throwaway SQLite test database."""
    values = {
        "SECRET_KEY": "test-secret-key",
        "DATABASE_URL": f"sqlite:///{tmp_path / 'partydrop_test.db'}",
        "PUBLIC_WEB_BASE_URL": "http://localhost:3000",
        "app_env": "test",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="function")
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test SQLite database."""
    return build_settings(tmp_path)


@pytest.fixture(scope="function")
def make_settings(tmp_path: Path) -> Callable[..., Settings]:
    """Factory for test settings with overrides, e.g. ``make_settings(app_env="production")``."""

    def _make_settings(**overrides) -> Settings:
        return build_settings(tmp_path, **overrides)

    return _make_settings


@pytest.fixture(scope="function")
def test_app(test_settings: Settings) -> Generator[FastAPI, None, None]:
    """Application with its tables created; dropped again afterwards."""
    app = create_app(test_settings)
    init_db(app.state.engine)

    yield app

    Base.metadata.drop_all(bind=app.state.engine)
    app.state.engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_app: FastAPI) -> Generator[Session, None, None]:
    """A session on the application's database for setup and assertions."""
    session = test_app.state.session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def test_client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a test client; it keeps cookies between requests."""
    with TestClient(test_app) as client:
        yield client


@pytest.fixture(scope="function")
def make_client(test_app: FastAPI) -> Generator[Callable[[], TestClient], None, None]:
    """Factory for extra clients, each with its own cookie jar."""
    clients: list[TestClient] = []

    def _make_client() -> TestClient:
        client = TestClient(test_app)
        clients.append(client)
        return client

    yield _make_client

    for client in clients:
        client.close()


@pytest.fixture(scope="function")
def register(test_client: TestClient) -> Callable:
    """Register through the API, leaving the session cookie on the client.

    Example:
        ```python
        def test_example(test_client, register):
            user = register("host@example.com", "password123")
            test_client.get("/api/events/mine")
        ```
    """

    def _register(email: str, password: str = "password123", client: TestClient | None = None) -> dict:
        client = client or test_client
        response = client.post("/api/auth/register", json={"email": email, "password": password})
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture(scope="function")
def create_user(test_db_session: Session, test_settings: Settings) -> Callable:
    """Factory function to create users directly in the database.

    Returns:
        Function that creates a user with given parameters and returns (user, token)
    """

    def _create_user(email: str, password: str, role: str = "user") -> tuple[User, str]:
        user = User(
            id=uuid4(),
            email=email,
            password_hash=hash_password(password),
            role=role,
            created_at=datetime.now(timezone.utc),
        )
        test_db_session.add(user)
        test_db_session.commit()
        test_db_session.refresh(user)

        token = create_access_token(
            data={"id": str(user.id), "email": user.email, "role": user.role},
            settings=test_settings,
        )

        return user, token

    return _create_user


@pytest.fixture
def assert_sets_token() -> Callable:
    """Check that a response sets the session cookie with its attributes."""

    def _assert_sets_token(response) -> None:
        headers = response.headers.get_list("set-cookie")
        assert headers, "expected a Set-Cookie header"
        joined = " | ".join(headers)
        assert joined.startswith(f"{SESSION_COOKIE_NAME}=")
        assert "httponly" in joined.lower()
        assert "samesite=lax" in joined.lower()
        assert "max-age=604800" in joined.lower()

    return _assert_sets_token


@pytest.fixture
def assert_clears_token() -> Callable:
    """Check that a response expires the session cookie."""

    def _assert_clears_token(response) -> None:
        headers = response.headers.get_list("set-cookie")
        assert headers, "expected a Set-Cookie header"
        joined = " | ".join(headers)
        assert joined.startswith(f"{SESSION_COOKIE_NAME}=")
        assert "max-age=0" in joined.lower()

    return _assert_clears_token
