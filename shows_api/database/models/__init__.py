"""SQLAlchemy ORM models for the Shows API."""

from shows_api.database.models.base import Base
from shows_api.database.models.show import Show, ShowCategory

__all__ = [
    "Base",
    "Show",
    "ShowCategory",
]
