"""Show model.

A movie, anime or series with an optional cover image reference.
"""

from enum import StrEnum

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shows_api.database.models.base import Base


class ShowCategory(StrEnum):
    """Allowed values of ``Show.category``."""

    MOVIE = "movie"
    ANIME = "anime"
    SERIE = "serie"


_CATEGORY_VALUES = ", ".join(f"'{c.value}'" for c in ShowCategory)


class Show(Base):
    """Shows table.

    Attributes:
        id: Primary key, store-assigned.
        title: Non-empty title.
        description: Non-empty description.
        category: One of ``ShowCategory``.
        image: Public path of the stored image, or None.
    """

    __tablename__ = "shows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(10), nullable=False)
    image: Mapped[str | None] = mapped_column(String(512), nullable=True)

    __table_args__ = (
        CheckConstraint(f"category IN ({_CATEGORY_VALUES})", name="ck_shows_category"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Show(id={self.id}, title='{self.title}', category='{self.category}')>"
