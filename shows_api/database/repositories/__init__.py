"""Database repositories for the Shows API.

Usage:
    from shows_api.database.repositories import ShowRepository

    repo = ShowRepository(store)
    show_id = await repo.create("Alpha", "d", "movie", None)
"""

from shows_api.database.repositories.show import ShowRepository

__all__ = [
    "ShowRepository",
]
