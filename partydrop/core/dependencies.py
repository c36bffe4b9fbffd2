"""Request dependencies: settings access and the session guard."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from pydantic import ValidationError

from partydrop.config import Settings
from partydrop.core.exceptions import AuthenticationRequired, InvalidSession
from partydrop.core.security import decode_access_token
from partydrop.core.session import SESSION_COOKIE_NAME
from partydrop.schemas.auth import SessionClaims

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


def get_session_token(request: Request) -> str:
    """Read the raw session token from the request cookie.

    Raises:
        AuthenticationRequired: If no session cookie was sent
    """
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        raise AuthenticationRequired()
    return token


def get_current_claims(
    request: Request,
    token: Annotated[str, Depends(get_session_token)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SessionClaims:
    """Verify the session token and attach its claims to the request.

    The cookie is left untouched when verification fails; only the
    ``/api/auth/me`` handler clears it.

    Args:
        request: Incoming request, ``request.state.user`` receives the claims
        token: Raw session token from the cookie
        settings: Application settings

    Returns:
        SessionClaims: Identity of the caller

    Raises:
        InvalidSession: If the token is expired, malformed or tampered with
    """
    payload = decode_access_token(token, settings)
    if payload is None:
        logger.warning(f"Rejected invalid session token on {request.url.path}")
        raise InvalidSession()

    try:
        claims = SessionClaims.model_validate(payload)
    except ValidationError:
        logger.warning(f"Rejected session token with malformed claims on {request.url.path}")
        raise InvalidSession()

    request.state.user = claims
    return claims
