"""Tests for the session guard dependencies."""

from datetime import timedelta
from typing import Annotated

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from partydrop.core.dependencies import get_current_claims
from partydrop.core.security import create_access_token
from partydrop.main import register_exception_handlers
from partydrop.schemas.auth import SessionClaims

USER_ID = "6f1f4a1e-8a55-4d8e-9a59-2f4f3a1a7c01"


@pytest.fixture
def guarded_client(test_settings) -> TestClient:
    """A bare app with one route behind the guard."""
    app = FastAPI()
    app.state.settings = test_settings
    register_exception_handlers(app)

    @app.get("/protected")
    async def protected(
        request: Request,
        claims: Annotated[SessionClaims, Depends(get_current_claims)],
    ) -> dict:
        assert request.state.user == claims
        return {"id": str(claims.id), "email": claims.email, "role": claims.role}

    return TestClient(app)


def test_missing_cookie_requires_authentication(guarded_client: TestClient):
    response = guarded_client.get("/protected")

    assert response.status_code == 401
    assert response.json() == {"message": "Authentication required"}
    assert "set-cookie" not in response.headers


def test_valid_token_attaches_claims(guarded_client: TestClient, test_settings):
    token = create_access_token({"id": USER_ID, "email": "host@example.com", "role": "user"}, test_settings)
    guarded_client.cookies.set("token", token)

    response = guarded_client.get("/protected")

    assert response.status_code == 200
    assert response.json() == {"id": USER_ID, "email": "host@example.com", "role": "user"}


def test_garbage_token_is_invalid_session_without_clearing(guarded_client: TestClient):
    guarded_client.cookies.set("token", "garbage")

    response = guarded_client.get("/protected")

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid or expired token"}
    assert "set-cookie" not in response.headers


def test_expired_token_is_invalid_session(guarded_client: TestClient, test_settings):
    token = create_access_token(
        {"id": USER_ID, "email": "host@example.com", "role": "user"},
        test_settings,
        expires_delta=timedelta(seconds=-1),
    )
    guarded_client.cookies.set("token", token)

    response = guarded_client.get("/protected")

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid or expired token"}


def test_token_without_identity_claims_is_invalid_session(guarded_client: TestClient, test_settings):
    token = create_access_token({"sub": "someone"}, test_settings)
    guarded_client.cookies.set("token", token)

    response = guarded_client.get("/protected")

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid or expired token"}
