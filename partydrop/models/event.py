"""Event model."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Uuid

from partydrop.database import Base

EVENT_NAME_MAX_LENGTH = 80


class Event(Base):
    """A host's event; ``uploads_open`` is the only mutable field."""

    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_created_by_created_at", "created_by", "created_at"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String(EVENT_NAME_MAX_LENGTH), nullable=False)
    uploads_open = Column(Boolean, default=True, nullable=False)
    created_by = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Event."""
        return f"<Event(id={self.id}, name={self.name}, created_by={self.created_by})>"
