"""Authentication router."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from partydrop.config import Settings
from partydrop.core.dependencies import get_app_settings, get_session_token
from partydrop.core.exceptions import InvalidSession
from partydrop.core.security import decode_access_token
from partydrop.core.session import clear_session_cookie, set_session_cookie
from partydrop.database import get_db
from partydrop.schemas.auth import Credentials, MessageResponse, SessionClaims, UserResponse
from partydrop.services.auth import (
    authenticate_user,
    issue_session_token,
    register_user,
    to_user_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    credentials: Credentials,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserResponse:
    """Create a new account and start a session for it.

    Args:
        credentials: Email and password
        response: Outgoing response, receives the session cookie
        db: Database session
        settings: Application settings

    Returns:
        UserResponse: Created user information

    Raises:
        EmailInUse: If the email already has an account
    """
    user = register_user(db, credentials)
    set_session_cookie(response, issue_session_token(user, settings), settings)
    return to_user_response(user)


@router.post("/login", response_model=UserResponse, status_code=status.HTTP_200_OK)
def login(
    credentials: Credentials,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserResponse:
    """Authenticate a user and start a session.

    Raises:
        InvalidCredentials: If email or password is invalid
    """
    user = authenticate_user(db, credentials)
    set_session_cookie(response, issue_session_token(user, settings), settings)
    return to_user_response(user)


@router.post("/logout", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """End the session by clearing the cookie. No session is required."""
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", status_code=status.HTTP_200_OK)
def me(
    token: Annotated[str, Depends(get_session_token)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> dict[str, Any]:
    """Return the claims of the current session.

    The token and its identity claims are verified here directly so that a
    bad or expired cookie is cleared on the way out.

    Raises:
        AuthenticationRequired: If no session cookie was sent
        InvalidSession: If the token does not verify; the cookie is cleared
    """
    payload = decode_access_token(token, settings)
    if payload is None:
        logger.warning("Clearing invalid session cookie")
        raise InvalidSession(clear_cookie=True)

    try:
        SessionClaims.model_validate(payload)
    except ValidationError:
        logger.warning("Clearing session cookie with malformed claims")
        raise InvalidSession(clear_cookie=True)

    return payload
