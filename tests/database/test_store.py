"""Tests for the SQLAlchemy store and database connection."""

import pytest
from sqlalchemy import insert, select, text

from shows_api.database.connection import DatabaseConnection, init_database
from shows_api.database.models.show import Show
from shows_api.database.store import ExecuteResult, SQLAlchemyStore, Store
from shows_api.errors import StoreError
from shows_api.settings import DatabaseSettings, Settings

_SHOWS = Show.__table__


class TestSQLAlchemyStore:
    """Tests for statement execution and error mapping."""

    @staticmethod
    def test_satisfies_protocol(store: SQLAlchemyStore) -> None:
        assert isinstance(store, Store)

    @staticmethod
    async def test_insert_reports_last_id(store: SQLAlchemyStore) -> None:
        result = await store.execute(
            insert(_SHOWS).values(title="A", description="d", category="movie")
        )
        assert result == ExecuteResult(last_id=1, rowcount=1)

    @staticmethod
    async def test_query_all_returns_dicts(store: SQLAlchemyStore) -> None:
        await store.execute(insert(_SHOWS).values(title="A", description="d", category="anime"))

        rows = await store.query_all(select(_SHOWS.c.title, _SHOWS.c.category))

        assert rows == [{"title": "A", "category": "anime"}]
        assert isinstance(rows[0], dict)

    @staticmethod
    async def test_driver_message_passed_through(store: SQLAlchemyStore) -> None:
        with pytest.raises(StoreError) as exc_info:
            await store.query_all(text("SELECT * FROM missing_table"))

        assert str(exc_info.value) == "no such table: missing_table"
        assert exc_info.value.to_body() == {"error": "no such table: missing_table"}


class TestDatabaseConnection:
    """Tests for engine setup and table bootstrap."""

    @staticmethod
    async def test_create_tables_is_idempotent(database: DatabaseConnection) -> None:
        await database.store.execute(
            insert(_SHOWS).values(title="A", description="d", category="movie")
        )
        await database.create_tables()

        assert len(await database.store.query_all(select(_SHOWS))) == 1

    @staticmethod
    async def test_creates_sqlite_parent_directory(tmp_path) -> None:
        db_path = tmp_path / "nested" / "dir" / "shows.db"
        db_settings = DatabaseSettings(DATABASE_URL=f"sqlite:///{db_path}")

        await init_database(db_settings)

        assert db_path.exists()

    @staticmethod
    async def test_init_database_creates_table(app_settings: Settings) -> None:
        await init_database(app_settings.database)

        db = DatabaseConnection(app_settings.database)
        try:
            assert await db.store.query_all(select(_SHOWS)) == []
        finally:
            await db.dispose()
