"""Store collaborator for the shows resource.

The resource handler only depends on the ``Store`` protocol: one awaited
call per statement, no transactions spanning several statements. The
SQLAlchemy implementation runs each statement in its own connection and
commits it immediately.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Executable

from shows_api.errors import StoreError
from shows_api.utils.logger import setup_logger

logger = setup_logger("shows_api.database.store")

# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of a write statement.

    Attributes:
        last_id: Primary key generated by an INSERT, else None.
        rowcount: Rows affected by the statement.
    """

    last_id: int | None
    rowcount: int


# =============================================================================
# PROTOCOL
# =============================================================================


@runtime_checkable
class Store(Protocol):
    """Capabilities the shows handler needs from a relational store."""

    async def execute(self, statement: Executable) -> ExecuteResult:
        """Run one INSERT, UPDATE or DELETE statement."""
        ...

    async def query_all(self, statement: Executable) -> list[dict[str, Any]]:
        """Run one SELECT and return every row as a mapping."""
        ...


# =============================================================================
# SQLALCHEMY IMPLEMENTATION
# =============================================================================


class SQLAlchemyStore:
    """``Store`` backed by an SQLAlchemy ``AsyncEngine``.

    Attributes:
        _engine: Async engine owning the connection pool.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize store.

        Args:
            engine: Async engine, owned by the caller.
        """
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        """Get the underlying async engine."""
        return self._engine

    async def execute(self, statement: Executable) -> ExecuteResult:
        """Run a write statement in its own transaction.

        Args:
            statement: Core INSERT, UPDATE or DELETE construct.

        Returns:
            Generated primary key (inserts only) and affected row count.

        Raises:
            StoreError: If the driver rejects the statement.
        """
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(statement)
                last_id = None
                if result.is_insert and result.inserted_primary_key:
                    last_id = result.inserted_primary_key[0]
                return ExecuteResult(last_id=last_id, rowcount=result.rowcount)
        except SQLAlchemyError as e:
            logger.error(f"Store write failed: {e}")
            raise StoreError(_driver_message(e)) from e

    async def query_all(self, statement: Executable) -> list[dict[str, Any]]:
        """Run a read statement.

        Args:
            statement: Core SELECT construct.

        Returns:
            One dict per row, in store-native order.

        Raises:
            StoreError: If the driver rejects the statement.
        """
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(statement)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Store read failed: {e}")
            raise StoreError(_driver_message(e)) from e


def _driver_message(error: SQLAlchemyError) -> str:
    """Extract the raw driver message from a wrapped error."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig)
    return str(error)
