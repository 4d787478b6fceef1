"""Show resource operations.

Each operation runs one validation pass, at most one image write and
exactly one store statement. The image is written before the statement;
if the statement then fails the file is left in place.
"""

from typing import Any

from shows_api.api.schemas import ShowFields
from shows_api.api.validation import (
    ShowSubmission,
    is_int,
    is_storable_id,
    parse_show_id,
    validate_submission,
)
from shows_api.database.repositories.show import ShowRepository
from shows_api.errors import NotFoundError
from shows_api.storage.images import ImageStorage
from shows_api.utils.logger import setup_logger

logger = setup_logger("shows_api.services.shows")

DELETED_MESSAGE = "Show deleted successfully"


class ShowService:
    """Create, list, update and delete shows.

    Attributes:
        _repository: Statements against the shows table.
        _images: Storage for attached images.
    """

    def __init__(self, repository: ShowRepository, images: ImageStorage) -> None:
        """Initialize service.

        Args:
            repository: Show repository bound to the injected store.
            images: Image storage for uploads.
        """
        self._repository = repository
        self._images = images

    @property
    def repository(self) -> ShowRepository:
        """Get the show repository."""
        return self._repository

    @property
    def images(self) -> ImageStorage:
        """Get the image storage."""
        return self._images

    async def create(self, submission: ShowSubmission) -> dict[str, Any]:
        """Create a show.

        Args:
            submission: Submitted fields and optional image.

        Returns:
            New id, submitted fields and image reference.

        Raises:
            ValidationError: If a field or the image is rejected.
            StoreError: If the insert fails.
        """
        fields = validate_submission(submission, self._images)
        image = await self._store_image(submission)
        show_id = await self._repository.create(
            title=fields.title,
            description=fields.description,
            category=fields.category.value,
            image=image,
        )
        logger.info(f"Created show {show_id} ({fields.category.value})")
        return {"id": show_id, **_fields_dict(fields), "image": image}

    async def list_shows(self) -> list[dict[str, Any]]:
        """List every show in store-native order.

        Raises:
            StoreError: If the read fails.
        """
        return await self._repository.list_all()

    async def update(self, raw_id: str, submission: ShowSubmission) -> dict[str, Any]:
        """Replace a show's fields, and its image when a new one is attached.

        Args:
            raw_id: ``id`` path parameter as received.
            submission: Submitted fields and optional image.

        Returns:
            The path id and the fields as submitted. ``image`` is None
            when no file was attached, even though the stored image is kept.

        Raises:
            ValidationError: If a field or the image is rejected.
            NotFoundError: If no row has this id.
            StoreError: If the update fails.
        """
        fields = validate_submission(submission, self._images)
        if not is_int(raw_id) or not is_storable_id(int(raw_id)):
            raise NotFoundError()

        image = await self._store_image(submission)
        affected = await self._repository.update(
            show_id=int(raw_id),
            title=fields.title,
            description=fields.description,
            category=fields.category.value,
            image=image,
        )
        if affected == 0:
            raise NotFoundError()
        logger.info(f"Updated show {raw_id}")
        return {"id": raw_id, **_fields_dict(fields), "image": image}

    async def delete(self, raw_id: str) -> dict[str, str]:
        """Delete a show.

        Args:
            raw_id: ``id`` path parameter as received.

        Returns:
            Confirmation message.

        Raises:
            ValidationError: If the id is not an integer.
            NotFoundError: If no row has this id.
            StoreError: If the delete fails.
        """
        show_id = parse_show_id(raw_id)
        if not is_storable_id(show_id):
            raise NotFoundError()
        affected = await self._repository.delete(show_id)
        if affected == 0:
            raise NotFoundError()
        logger.info(f"Deleted show {show_id}")
        return {"message": DELETED_MESSAGE}

    async def _store_image(self, submission: ShowSubmission) -> str | None:
        """Write the attached image, if any, and return its reference."""
        if submission.image is None:
            return None
        return await self._images.save(submission.image)


def _fields_dict(fields: ShowFields) -> dict[str, str]:
    """Plain values of validated fields, in response order."""
    return {
        "title": fields.title,
        "description": fields.description,
        "category": fields.category.value,
    }
