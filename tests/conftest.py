"""Shared pytest fixtures.

Every test gets its own SQLite database and upload directory under
``tmp_path``; the HTTP client talks to the app in-process.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from shows_api.api.main import create_app
from shows_api.database.connection import DatabaseConnection
from shows_api.database.store import SQLAlchemyStore
from shows_api.settings import Settings
from shows_api.storage.images import ImageStorage


@pytest.fixture(autouse=True)
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Environment for reproducible tests."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_DIR", "")
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'shows.db'}")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("UPLOAD_URL_PREFIX", "/uploads")
    monkeypatch.setenv("API_PREFIX", "/shows")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000")


@pytest.fixture
def app_settings() -> Settings:
    """Settings read from the test environment."""
    return Settings()


@pytest.fixture
def upload_dir(app_settings: Settings) -> Path:
    """Upload directory of the test app."""
    return app_settings.uploads.directory


@pytest.fixture
def images(app_settings: Settings) -> ImageStorage:
    """Image storage writing to the test upload directory."""
    return ImageStorage.from_settings(app_settings.uploads)


@pytest.fixture
async def database(app_settings: Settings) -> AsyncGenerator[DatabaseConnection, None]:
    """SQLite database with the shows table created."""
    db = DatabaseConnection(app_settings.database)
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def store(database: DatabaseConnection) -> SQLAlchemyStore:
    """Store bound to the test database."""
    return database.store


@pytest.fixture
def app(app_settings: Settings, store: SQLAlchemyStore) -> FastAPI:
    """Application wired to the test store."""
    return create_app(app_settings, store=store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide an ``httpx.AsyncClient`` wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

