"""Authentication schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from partydrop.core.security import BCRYPT_MAX_PASSWORD_BYTES


class Credentials(BaseModel):
    """Register and login request schema."""

    email: StrictStr = Field(min_length=1, max_length=255)
    password: StrictStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase without surrounding whitespace."""
        return v.lower().strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Reject passwords bcrypt would silently truncate."""
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long")
        return v


class UserResponse(BaseModel):
    """Public view of a user."""

    id: str
    email: str
    role: str


class SessionClaims(BaseModel):
    """Identity carried by a session token."""

    model_config = ConfigDict(extra="ignore")

    id: UUID
    email: str
    role: str


class MessageResponse(BaseModel):
    """Plain acknowledgment."""

    message: str
