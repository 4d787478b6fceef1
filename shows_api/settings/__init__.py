"""Centralized configuration for the Shows API.

All configuration values are sourced from environment variables (.env file)
and every section has a safe local default, so the service starts against a
SQLite file without any configuration.

Usage:
    from shows_api.settings import settings

    settings.database.async_url
    settings.uploads.directory
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shows_api.settings.api import APISettings, CORSSettings
from shows_api.settings.base import LoggingSettings
from shows_api.settings.database import DatabaseSettings
from shows_api.settings.uploads import UploadSettings

__all__ = [
    # Main
    "Settings",
    "settings",
    # Base
    "LoggingSettings",
    # Database
    "DatabaseSettings",
    # API
    "APISettings",
    "CORSSettings",
    # Uploads
    "UploadSettings",
    # Utilities
    "get_masked_settings",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from shows_api.settings import settings`
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    uploads: UploadSettings = Field(default_factory=UploadSettings)
    api: APISettings = Field(default_factory=APISettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings(source: Settings | None = None) -> dict[str, Any]:
    """Return settings dict with sensitive values masked.

    Args:
        source: Settings to dump. Defaults to the singleton.

    Returns:
        Configuration dictionary safe for logging.
    """
    config = (source or settings).model_dump()
    mask = "***MASKED***"

    # Paths to mask (section, key)
    secrets = [
        ("database", "url"),
    ]

    for section, key in secrets:
        if section in config and key in config[section] and config[section][key]:
            config[section][key] = mask

    return config
