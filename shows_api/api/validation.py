"""Request validation for the shows resource.

Turns raw submitted fields and path parameters into typed values, or a
``ValidationError`` listing every failing field with its message.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from shows_api.api.schemas import ShowFields
from shows_api.database.models.show import ShowCategory
from shows_api.errors import FieldError, ValidationError
from shows_api.storage.images import ImageStorage, ImageUpload

_INT_PATTERN = re.compile(r"[-+]?(0|[1-9][0-9]*)")

# Portable range of the INTEGER primary key (32-bit on PostgreSQL).
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1

_CATEGORIES = [c.value for c in ShowCategory]

FIELD_MESSAGES = {
    "title": "Title is required",
    "description": "Description is required",
    "category": f"Category must be {', '.join(_CATEGORIES[:-1])}, or {_CATEGORIES[-1]}",
}
ID_MESSAGE = "ID must be an integer"


@dataclass(frozen=True)
class ShowSubmission:
    """Raw create/update input.

    Attributes:
        fields: Submitted body fields, unvalidated.
        image: Attached file, if any.
    """

    fields: Mapping[str, Any]
    image: ImageUpload | None = None


def field_errors(data: Mapping[str, Any]) -> tuple[ShowFields | None, list[FieldError]]:
    """Validate title, description and category.

    Args:
        data: Submitted body fields.

    Returns:
        Parsed fields (None on failure) and the failing fields, one per name.
    """
    payload = {name: data.get(name) for name in FIELD_MESSAGES}
    try:
        return ShowFields.model_validate(payload), []
    except PydanticValidationError as e:
        failing = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        errors = [
            FieldError(path=name, msg=message, value=payload[name])
            for name, message in FIELD_MESSAGES.items()
            if name in failing
        ]
        return None, errors


def validate_submission(submission: ShowSubmission, images: ImageStorage) -> ShowFields:
    """Validate a create or update submission, attached file included.

    Args:
        submission: Raw input.
        images: Storage deciding whether the file is acceptable.

    Returns:
        Validated fields.

    Raises:
        ValidationError: If any field or the file is rejected.
    """
    fields, errors = field_errors(submission.fields)
    if submission.image is not None:
        image_error = images.check(submission.image)
        if image_error is not None:
            errors.append(image_error)
    if errors or fields is None:
        raise ValidationError(errors)
    return fields


def is_int(raw: str) -> bool:
    """True when ``raw`` is an optionally signed integer without leading zeros."""
    return _INT_PATTERN.fullmatch(raw) is not None


def is_storable_id(show_id: int) -> bool:
    """True when ``show_id`` fits the primary key column."""
    return ID_MIN <= show_id <= ID_MAX


def parse_show_id(raw: str) -> int:
    """Parse the ``id`` path parameter.

    Args:
        raw: Path parameter as received.

    Returns:
        Integer id.

    Raises:
        ValidationError: If ``raw`` is not an integer.
    """
    if not is_int(raw):
        raise ValidationError([FieldError(path="id", msg=ID_MESSAGE, value=raw, location="params")])
    return int(raw)
