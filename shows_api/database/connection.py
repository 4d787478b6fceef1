"""Database connection management with SQLAlchemy 2.0 asyncio.

Owns the async engine the shows store runs on and bootstraps the
``shows`` table.
"""

from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from shows_api.database.models import Base
from shows_api.database.store import SQLAlchemyStore
from shows_api.settings import DatabaseSettings
from shows_api.utils.logger import setup_logger

logger = setup_logger("shows_api.database.connection")


class DatabaseConnection:
    """Manages the async connection pool of the shows store.

    Attributes:
        _engine: SQLAlchemy async engine.
        _store: Store bound to the engine.

    Example:
        ```python
        db = DatabaseConnection(settings.database)
        await db.create_tables()
        rows = await db.store.query_all(select(Show.__table__))
        await db.dispose()
        ```
    """

    def __init__(self, db_settings: DatabaseSettings) -> None:
        """Create the engine from settings.

        Args:
            db_settings: Database section of the application settings.
        """
        self._url = db_settings.async_url
        self._ensure_sqlite_directory(self._url)
        self._engine = self._create_engine(self._url, db_settings.echo)
        self._store = SQLAlchemyStore(self._engine)

    @staticmethod
    def _create_engine(url: str, echo: bool) -> AsyncEngine:
        """Create asynchronous SQLAlchemy engine.

        Args:
            url: Async database URL.
            echo: Log emitted SQL.

        Returns:
            SQLAlchemy AsyncEngine.
        """
        return create_async_engine(url, pool_pre_ping=True, echo=echo)

    @staticmethod
    def _ensure_sqlite_directory(url: str) -> None:
        """Create the parent directory of a SQLite database file."""
        parsed = make_url(url)
        if parsed.get_backend_name() != "sqlite":
            return
        if parsed.database and parsed.database != ":memory:":
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    @property
    def engine(self) -> AsyncEngine:
        """Get the underlying async engine."""
        return self._engine

    @property
    def store(self) -> SQLAlchemyStore:
        """Get the store bound to this connection pool."""
        return self._store

    async def create_tables(self) -> None:
        """Create missing tables. Existing tables are left untouched."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")

    async def dispose(self) -> None:
        """Dispose the connection pool.

        Should be called during application shutdown.
        """
        await self._engine.dispose()


async def init_database(db_settings: DatabaseSettings) -> None:
    """Create the shows table and release the pool.

    Args:
        db_settings: Database section of the application settings.
    """
    db = DatabaseConnection(db_settings)
    try:
        await db.create_tables()
    finally:
        await db.dispose()
