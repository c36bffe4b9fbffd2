"""Pydantic schemas package."""

from partydrop.schemas.auth import Credentials, MessageResponse, SessionClaims, UserResponse
from partydrop.schemas.event import (
    EventCreate,
    EventCreatedResponse,
    EventPublicResponse,
    EventSummary,
    UploadsStatusResponse,
    UploadsUpdate,
)

__all__ = [
    "Credentials",
    "MessageResponse",
    "SessionClaims",
    "UserResponse",
    "EventCreate",
    "EventCreatedResponse",
    "EventPublicResponse",
    "EventSummary",
    "UploadsStatusResponse",
    "UploadsUpdate",
]
