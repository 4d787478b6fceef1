"""Pydantic schemas for API request/response validation.

Defines the show payload validated on create and update, the response
bodies of the shows resource and the health check.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from shows_api.database.models.show import ShowCategory

# =============================================================================
# HEALTH
# =============================================================================


class DatabaseComponentHealth(BaseModel):
    """Database connection health status."""

    connected: bool = False


class HealthComponents(BaseModel):
    """Health status of all system components."""

    database: DatabaseComponentHealth = Field(default_factory=DatabaseComponentHealth)


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(examples=["healthy"])
    version: str = Field(examples=["1.0.0"])
    components: HealthComponents = Field(default_factory=HealthComponents)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


# =============================================================================
# SHOW PAYLOAD
# =============================================================================


class ShowFields(BaseModel):
    """Fields required on both create and update.

    Partial updates are not supported: every field is resupplied.
    """

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: ShowCategory


# =============================================================================
# SHOW RESPONSES
# =============================================================================


class ShowRead(BaseModel):
    """A persisted show, as listed or just created."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    category: str
    image: str | None = None


class ShowUpdateResponse(BaseModel):
    """Echo of an accepted update.

    ``id`` is the path parameter as received and the fields are the
    submitted values, not a re-read of the row.
    """

    id: str
    title: str
    description: str
    category: str
    image: str | None = None


class DeleteResponse(BaseModel):
    """Delete confirmation."""

    message: str = Field(examples=["Show deleted successfully"])


# =============================================================================
# ERRORS
# =============================================================================


class ErrorResponse(BaseModel):
    """Body of 404 and 500 responses."""

    error: str


class FieldErrorItem(BaseModel):
    """One failing field of a 400 response."""

    type: str = "field"
    value: Any = None
    msg: str
    path: str
    location: str


class ValidationErrorResponse(BaseModel):
    """Body of 400 responses."""

    errors: list[FieldErrorItem]
