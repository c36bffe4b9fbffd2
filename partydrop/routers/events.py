"""Events router."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from partydrop.config import Settings
from partydrop.core.dependencies import get_app_settings, get_current_claims
from partydrop.database import get_db
from partydrop.schemas.auth import SessionClaims
from partydrop.schemas.event import (
    EventCreate,
    EventCreatedResponse,
    EventPublicResponse,
    EventSummary,
    UploadsStatusResponse,
    UploadsUpdate,
)
from partydrop.services.events import (
    create_event,
    get_public_event,
    list_owned_events,
    set_uploads_open,
)

router = APIRouter(prefix="/api/events", tags=["events"])


@router.post("", response_model=EventCreatedResponse, status_code=status.HTTP_201_CREATED)
def create(
    event_data: EventCreate,
    claims: Annotated[SessionClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> EventCreatedResponse:
    """Create an event owned by the current user.

    Args:
        event_data: Event name
        claims: Current session identity
        db: Database session
        settings: Application settings

    Returns:
        EventCreatedResponse: Event id and share link
    """
    return create_event(db, claims.id, event_data.name, settings)


@router.get("/mine", response_model=list[EventSummary])
def list_mine(
    claims: Annotated[SessionClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> list[EventSummary]:
    """List the current user's events, newest first."""
    return list_owned_events(db, claims.id, settings)


@router.patch("/{event_id}/uploads", response_model=UploadsStatusResponse)
def update_uploads(
    event_id: str,
    update: UploadsUpdate,
    claims: Annotated[SessionClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> UploadsStatusResponse:
    """Open or close uploads on one of the current user's events.

    Raises:
        NotFound: If the event does not exist, is not owned by the user or
            the id is malformed
    """
    return set_uploads_open(db, claims.id, event_id, update.uploads_open)


@router.get("/{event_id}", response_model=EventPublicResponse)
def get_public(
    event_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> EventPublicResponse:
    """Public event metadata for the share page. No authentication."""
    return get_public_event(db, event_id)
