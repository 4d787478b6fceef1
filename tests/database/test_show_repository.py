"""Tests for ShowRepository against a SQLite store."""

import pytest

from shows_api.database.repositories.show import ShowRepository
from shows_api.database.store import SQLAlchemyStore
from shows_api.errors import StoreError


@pytest.fixture
def repository(store: SQLAlchemyStore) -> ShowRepository:
    """Repository bound to the test database."""
    return ShowRepository(store)


class TestCreateAndList:
    """Tests for inserts and reads."""

    @staticmethod
    async def test_ids_are_sequential(repository: ShowRepository) -> None:
        first = await repository.create("A", "d", "movie", None)
        second = await repository.create("B", "d", "anime", "/uploads/x.png")

        assert (first, second) == (1, 2)

    @staticmethod
    async def test_list_returns_all_columns(repository: ShowRepository) -> None:
        await repository.create("A", "d", "movie", "/uploads/a.png")

        assert await repository.list_all() == [
            {
                "id": 1,
                "title": "A",
                "description": "d",
                "category": "movie",
                "image": "/uploads/a.png",
            }
        ]

    @staticmethod
    async def test_empty_table(repository: ShowRepository) -> None:
        assert await repository.list_all() == []

    @staticmethod
    async def test_category_constraint(repository: ShowRepository) -> None:
        with pytest.raises(StoreError, match="CHECK constraint failed"):
            await repository.create("A", "d", "podcast", None)


class TestUpdate:
    """Tests for ShowRepository.update."""

    @staticmethod
    async def test_none_image_keeps_stored_value(repository: ShowRepository) -> None:
        show_id = await repository.create("A", "d", "movie", "/uploads/a.png")

        affected = await repository.update(show_id, "A2", "d2", "serie", None)

        assert affected == 1
        row = (await repository.list_all())[0]
        assert row["title"] == "A2"
        assert row["category"] == "serie"
        assert row["image"] == "/uploads/a.png"

    @staticmethod
    async def test_new_image_replaces_value(repository: ShowRepository) -> None:
        show_id = await repository.create("A", "d", "movie", "/uploads/a.png")

        await repository.update(show_id, "A", "d", "movie", "/uploads/b.png")

        assert (await repository.list_all())[0]["image"] == "/uploads/b.png"

    @staticmethod
    async def test_unknown_id_affects_nothing(repository: ShowRepository) -> None:
        assert await repository.update(404, "A", "d", "movie", None) == 0


class TestDelete:
    """Tests for ShowRepository.delete."""

    @staticmethod
    async def test_delete_then_again(repository: ShowRepository) -> None:
        show_id = await repository.create("A", "d", "movie", None)

        assert await repository.delete(show_id) == 1
        assert await repository.delete(show_id) == 0
        assert await repository.list_all() == []
