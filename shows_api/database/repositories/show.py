"""Show repository.

Issues exactly one statement against the store per operation.
"""

from typing import Any

from sqlalchemy import delete, func, insert, select, update

from shows_api.database.models.show import Show
from shows_api.database.store import Store

_SHOWS = Show.__table__


class ShowRepository:
    """Repository for Show entity operations.

    Attributes:
        store: Store the statements run against.
    """

    def __init__(self, store: Store) -> None:
        """Initialize show repository.

        Args:
            store: Store implementation (SQLAlchemy or test fake).
        """
        self._store = store

    @property
    def store(self) -> Store:
        """Get the store."""
        return self._store

    async def create(
        self,
        title: str,
        description: str,
        category: str,
        image: str | None,
    ) -> int | None:
        """Insert one show.

        Args:
            title: Show title.
            description: Show description.
            category: Show category value.
            image: Stored image reference or None.

        Returns:
            Store-assigned identifier.
        """
        stmt = insert(_SHOWS).values(
            title=title,
            description=description,
            category=category,
            image=image,
        )
        result = await self._store.execute(stmt)
        return result.last_id

    async def list_all(self) -> list[dict[str, Any]]:
        """Retrieve every show in store-native order.

        Returns:
            One dict per row with all columns.
        """
        return await self._store.query_all(select(_SHOWS))

    async def update(
        self,
        show_id: int,
        title: str,
        description: str,
        category: str,
        image: str | None,
    ) -> int:
        """Overwrite a show's fields.

        ``image`` only replaces the stored value when it is not None.

        Args:
            show_id: Primary key of the row.
            title: New title.
            description: New description.
            category: New category value.
            image: New image reference, or None to keep the current one.

        Returns:
            Number of rows affected (0 or 1).
        """
        stmt = (
            update(_SHOWS)
            .where(_SHOWS.c.id == show_id)
            .values(
                title=title,
                description=description,
                category=category,
                image=func.coalesce(image, _SHOWS.c.image),
            )
        )
        result = await self._store.execute(stmt)
        return result.rowcount

    async def delete(self, show_id: int) -> int:
        """Delete a show by primary key.

        Args:
            show_id: Primary key of the row.

        Returns:
            Number of rows affected (0 or 1).
        """
        result = await self._store.execute(delete(_SHOWS).where(_SHOWS.c.id == show_id))
        return result.rowcount
