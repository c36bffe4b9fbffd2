"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# config.py lives in partydrop/, the optional .env sits next to it
_CONFIG_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_CONFIG_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="PartyDrop", description="Application name")
    app_env: str = Field(default="development", description="Application environment")
    log_level: str = Field(default="INFO", description="Root log level")

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address", alias="HOST")
    port: int = Field(default=4000, description="Bind port", alias="PORT")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API with credentials",
        alias="CORS_ORIGINS",
    )

    # Security
    secret_key: str = Field(
        ...,
        description="Secret key for signing session tokens",
        alias="SECRET_KEY",
    )
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(
        default=7 * 24 * 60, description="Session token expiration in minutes"
    )

    # Database
    database_url: str = Field(
        ...,
        description="Database connection URL",
        alias="DATABASE_URL",
    )

    # Web front end
    public_web_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the public web app, used to build share links",
        alias="PUBLIC_WEB_BASE_URL",
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str:
        """Validate and normalize database URL."""
        if v is None or v == "":
            raise ValueError("DATABASE_URL is required")
        return v.strip()

    @field_validator("app_env", mode="before")
    @classmethod
    def normalize_app_env(cls, v: str) -> str:
        """Normalize app environment to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("public_web_base_url", mode="before")
    @classmethod
    def normalize_public_web_base_url(cls, v: str) -> str:
        """Strip whitespace and any trailing slash."""
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @model_validator(mode="after")
    def check_test_database(self) -> "Settings":
        """Refuse to run the test environment against a non-test database."""
        if self.app_env == "test" and "partydrop_test" not in self.database_url:
            raise ValueError("Refusing to use a non-test database in test environment")
        return self

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings: Application settings instance

    Example:
        ```python
        from partydrop.config import get_settings

        settings = get_settings()
        print(settings.database_url)
        ```
    """
    return Settings()
