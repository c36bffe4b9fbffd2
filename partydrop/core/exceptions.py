"""Application error kinds and their HTTP mapping."""

from fastapi import status


class PartyDropError(Exception):
    """Base exception for failures reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(PartyDropError):
    """Raised when a request body or parameter is malformed or missing."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class EmailInUse(PartyDropError):
    """Raised when registering an email that already has an account."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already in use"


class InvalidCredentials(PartyDropError):
    """Raised for an unknown email or a wrong password, without saying which."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class AuthenticationRequired(PartyDropError):
    """Raised when a protected route is called without a session cookie."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class InvalidSession(PartyDropError):
    """Raised when the session token is expired, malformed or tampered with.

    Args:
        message: Optional override of the default message
        clear_cookie: Also clear the session cookie on the error response
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"

    def __init__(self, message: str | None = None, clear_cookie: bool = False) -> None:
        super().__init__(message)
        self.clear_cookie = clear_cookie


class NotFound(PartyDropError):
    """Raised for missing, foreign or malformed-id resources alike."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(PartyDropError):
    """Raised when the store or a security primitive fails unexpectedly."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
