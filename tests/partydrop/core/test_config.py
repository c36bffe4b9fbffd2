"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from partydrop.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "SECRET_KEY": "secret",
        "DATABASE_URL": "sqlite:///./partydrop_test.db",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults():
    settings = make_settings()

    assert settings.app_name == "PartyDrop"
    assert settings.app_env == "development"
    assert settings.algorithm == "HS256"
    assert settings.access_token_expire_minutes == 7 * 24 * 60
    assert settings.public_web_base_url == "http://localhost:3000"
    assert settings.port == 4000
    assert settings.is_production is False


def test_database_url_is_stripped():
    settings = make_settings(DATABASE_URL="  postgresql://u:p@localhost:5432/partydrop  ")

    assert settings.database_url == "postgresql://u:p@localhost:5432/partydrop"


def test_empty_database_url_rejected():
    with pytest.raises(ValidationError):
        make_settings(DATABASE_URL="")


def test_app_env_normalized():
    settings = make_settings(app_env="  PRODUCTION ")

    assert settings.app_env == "production"
    assert settings.is_production is True


def test_public_web_base_url_trailing_slash_removed():
    settings = make_settings(PUBLIC_WEB_BASE_URL="https://partydrop.example/ ")

    assert settings.public_web_base_url == "https://partydrop.example"


def test_test_env_refuses_non_test_database():
    with pytest.raises(ValidationError, match="non-test database"):
        make_settings(app_env="test", DATABASE_URL="postgresql://u:p@localhost:5432/partydrop")


def test_test_env_accepts_test_database():
    settings = make_settings(app_env="test", DATABASE_URL="postgresql://u:p@localhost:5432/partydrop_test")

    assert settings.app_env == "test"
