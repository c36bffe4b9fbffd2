"""Ownership-scoped event operations."""

import logging
from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from partydrop.config import Settings
from partydrop.core.exceptions import InternalError, NotFound
from partydrop.models.event import Event
from partydrop.schemas.event import (
    EventCreatedResponse,
    EventPublicResponse,
    EventSummary,
    UploadsStatusResponse,
)

logger = logging.getLogger(__name__)


def build_share_url(event_id: UUID, settings: Settings) -> str:
    """Public web link for an event."""
    return f"{settings.public_web_base_url}/e/{event_id}"


def format_timestamp(value: datetime) -> str:
    """ISO 8601 in UTC; SQLite hands back naive datetimes."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_event_id(event_id: str) -> UUID:
    """Parse an event id from a path, treating malformed ids as missing events.

    Raises:
        NotFound: If the id is not a valid UUID
    """
    try:
        return UUID(event_id)
    except ValueError:
        raise NotFound("Event not found")


def create_event(db: Session, owner_id: UUID, name: str, settings: Settings) -> EventCreatedResponse:
    """Create an event owned by the caller with uploads open.

    Args:
        db: Database session
        owner_id: ID of the authenticated caller
        name: Trimmed event name
        settings: Application settings, for the share link

    Returns:
        EventCreatedResponse: New event id and its share link

    Raises:
        InternalError: If the store fails
    """
    new_event = Event(
        id=uuid4(),
        name=name,
        uploads_open=True,
        created_by=owner_id,
        created_at=datetime.now(timezone.utc),
    )

    try:
        db.add(new_event)
        db.commit()
        db.refresh(new_event)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to create event for user {owner_id}: {e}")
        raise InternalError()

    logger.info(f"User {owner_id} created event {new_event.id}")

    return EventCreatedResponse(
        event_id=str(new_event.id),
        share_url=build_share_url(new_event.id, settings),
    )


def list_owned_events(db: Session, owner_id: UUID, settings: Settings) -> list[EventSummary]:
    """List the caller's events, newest first."""
    try:
        events = (
            db.query(Event)
            .filter(Event.created_by == owner_id)
            .order_by(Event.created_at.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception(f"Failed to list events for user {owner_id}: {e}")
        raise InternalError()

    return [
        EventSummary(
            id=str(event.id),
            name=event.name,
            uploads_open=event.uploads_open,
            created_at=format_timestamp(event.created_at),
            share_url=build_share_url(event.id, settings),
        )
        for event in events
    ]


def set_uploads_open(db: Session, owner_id: UUID, event_id: str, uploads_open: bool) -> UploadsStatusResponse:
    """Open or close uploads on an event the caller owns.

    The write is a single UPDATE filtered on both the event id and the owner,
    so an event owned by someone else is reported exactly like a missing one.

    Args:
        db: Database session
        owner_id: ID of the authenticated caller
        event_id: Event id from the request path
        uploads_open: New state of the uploads flag

    Returns:
        UploadsStatusResponse: Event id and the stored flag

    Raises:
        NotFound: If the id is malformed, unknown or owned by another user
        InternalError: If the store fails
    """
    event_uuid = parse_event_id(event_id)

    try:
        updated = (
            db.query(Event)
            .filter(Event.id == event_uuid, Event.created_by == owner_id)
            .update({Event.uploads_open: uploads_open}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to update uploads for event {event_uuid}: {e}")
        raise InternalError()

    if updated == 0:
        raise NotFound("Event not found")

    logger.info(f"User {owner_id} set uploads_open={uploads_open} on event {event_uuid}")

    return UploadsStatusResponse(id=str(event_uuid), uploads_open=uploads_open)


def get_public_event(db: Session, event_id: str) -> EventPublicResponse:
    """Fetch the public metadata of an event.

    Raises:
        NotFound: If the id is malformed or unknown
        InternalError: If the store fails
    """
    event_uuid = parse_event_id(event_id)

    try:
        event = db.query(Event).filter(Event.id == event_uuid).first()
    except SQLAlchemyError as e:
        logger.exception(f"Failed to load event {event_uuid}: {e}")
        raise InternalError()

    if event is None:
        raise NotFound("Event not found")

    return EventPublicResponse(
        id=str(event.id),
        name=event.name,
        uploads_open=event.uploads_open,
        created_at=format_timestamp(event.created_at),
    )
