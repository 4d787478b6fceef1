"""Database configuration settings.

Connection URL for the shows store.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shows_api.settings.base import get_project_root

_DEFAULT_SQLITE_PATH = get_project_root() / "data" / "shows.db"


class DatabaseSettings(BaseSettings):
    """Relational store configuration.

    Attributes:
        url: Async SQLAlchemy URL. Defaults to a local SQLite file.
        echo: Log every SQL statement.
    """

    url: str = Field(
        default=f"sqlite+aiosqlite:///{_DEFAULT_SQLITE_PATH}",
        alias="DATABASE_URL",
    )
    echo: bool = Field(default=False, alias="DB_ECHO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def async_url(self) -> str:
        """Normalize plain driver URLs to their asyncio dialects."""
        if self.url.startswith("postgres://"):
            return self.url.replace("postgres://", "postgresql+asyncpg://", 1)
        if self.url.startswith("postgresql://"):
            return self.url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if self.url.startswith("sqlite:///"):
            return self.url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return self.url
