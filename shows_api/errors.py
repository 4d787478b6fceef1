"""Error taxonomy for the shows resource.

Each error knows the HTTP status and JSON body it maps to, so route
handlers can translate failures locally without a global handler.
"""

from dataclasses import asdict, dataclass
from typing import Any, Literal

from fastapi import status
from fastapi.responses import JSONResponse

# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class FieldError:
    """One failing request field.

    Attributes:
        path: Field name (``title``, ``image``, ``id``...).
        msg: Human readable message.
        value: Value as received, or None when missing.
        location: Where the field was read from.
        type: Always ``field``.
    """

    path: str
    msg: str
    value: Any = None
    location: Literal["body", "params"] = "body"
    type: str = "field"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the ``errors`` array of a 400 response."""
        return asdict(self)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ShowsAPIError(Exception):
    """Base exception for shows resource failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def to_body(self) -> dict[str, Any]:
        """JSON body describing the failure."""
        return {"error": str(self)}

    def to_response(self) -> JSONResponse:
        """Build the HTTP response for this failure."""
        return JSONResponse(status_code=self.status_code, content=self.to_body())


class ValidationError(ShowsAPIError):
    """Raised when request fields, the id or the attached file are invalid."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.path}: {e.msg}" for e in self.errors))

    def to_body(self) -> dict[str, Any]:
        return {"errors": [error.to_dict() for error in self.errors]}


class NotFoundError(ShowsAPIError):
    """Raised when a statement keyed by id affected no row."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Show not found") -> None:
        super().__init__(message)


class StoreError(ShowsAPIError):
    """Raised when the underlying store read or write fails.

    The driver message is passed through verbatim.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
