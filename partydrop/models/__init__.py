"""Database models package."""

from partydrop.models.event import Event
from partydrop.models.user import User

__all__ = ["User", "Event"]
