"""Session cookie handling."""

from fastapi import Response

from partydrop.config import Settings

SESSION_COOKIE_NAME = "token"
SESSION_COOKIE_MAX_AGE = 7 * 24 * 60 * 60  # 7 days in seconds


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Set the session cookie on a response.

    HTTP-only and ``SameSite=Lax``; ``Secure`` only in production.
    """
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Clear the session cookie, repeating the attributes it was set with."""
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
