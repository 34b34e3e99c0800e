"""Centralized configuration management using Pydantic Settings.

This module provides typed configuration for the client engine,
loaded from environment variables with sensible defaults.

Usage:
    from eventsync.config import get_settings
    settings = get_settings()
    base_url = settings.client.base_url
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "0.3.0"


class ClientSettings(BaseSettings):
    """Remote scheduling API configuration."""

    model_config = SettingsConfigDict(env_prefix="EVENTSYNC_", extra="ignore")

    base_url: str = Field(default="http://localhost:8080", description="API origin")
    timeout_sec: float = Field(default=10.0, description="Per-request timeout in seconds")
    copy_message_ttl_sec: float = Field(
        default=3.0, description="How long a copy confirmation stays visible"
    )
    user_agent: str = Field(default=f"eventsync/{VERSION}")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class DebugSettings(BaseSettings):
    """Debug flags configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    request: bool = Field(default=False, alias="eventsync_request_debug")

    @field_validator("*", mode="before")
    @classmethod
    def parse_bool(cls, v):
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes")
        return bool(v)


class LogSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="EVENTSYNC_LOG_", extra="ignore")

    level: str = Field(default="INFO", description="Root log level")

    @field_validator("level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()


class Settings:
    """Main settings combining all configuration sections.

    Each subsetting is loaded independently with its own prefix.
    """

    def __init__(self) -> None:
        self.client = ClientSettings()
        self.debug = DebugSettings()
        self.log = LogSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance (singleton pattern)."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear cached settings (useful for testing)."""
    get_settings.cache_clear()
