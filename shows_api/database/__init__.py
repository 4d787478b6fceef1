"""Database package for the Shows API.

Provides the store protocol, its SQLAlchemy implementation, the ORM model
and the shows repository.

Usage:
    from shows_api.database import DatabaseConnection, ShowRepository

    db = DatabaseConnection(settings.database)
    repo = ShowRepository(db.store)
    shows = await repo.list_all()
"""

from shows_api.database.connection import DatabaseConnection, init_database
from shows_api.database.models import Base, Show, ShowCategory
from shows_api.database.repositories import ShowRepository
from shows_api.database.store import ExecuteResult, SQLAlchemyStore, Store

__all__ = [
    # Connection
    "DatabaseConnection",
    "init_database",
    # Store
    "Store",
    "SQLAlchemyStore",
    "ExecuteResult",
    # Models
    "Base",
    "Show",
    "ShowCategory",
    # Repositories
    "ShowRepository",
]
