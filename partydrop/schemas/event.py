"""Event schemas.

Field names are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from partydrop.models.event import EVENT_NAME_MAX_LENGTH


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EventCreate(CamelModel):
    """Event creation request schema."""

    name: StrictStr = Field(min_length=1, max_length=EVENT_NAME_MAX_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Normalize name by stripping whitespace."""
        return v.strip() if isinstance(v, str) else v


class UploadsUpdate(CamelModel):
    """Uploads toggle request schema; only a JSON boolean is accepted."""

    uploads_open: StrictBool


class EventCreatedResponse(CamelModel):
    event_id: str
    share_url: str


class EventSummary(CamelModel):
    """Owner's view of an event."""

    id: str
    name: str
    uploads_open: bool
    created_at: str
    share_url: str


class EventPublicResponse(CamelModel):
    """Public view of an event; carries nothing that identifies the owner."""

    id: str
    name: str
    uploads_open: bool
    created_at: str


class UploadsStatusResponse(CamelModel):
    id: str
    uploads_open: bool
