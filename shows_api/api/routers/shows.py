"""Show endpoints for REST API.

Provides create, list, update and delete for the shows resource. Each
endpoint maps its own failures to a JSON response.
"""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from shows_api.api.schemas import (
    DeleteResponse,
    ErrorResponse,
    ShowRead,
    ShowUpdateResponse,
    ValidationErrorResponse,
)
from shows_api.api.validation import ShowSubmission
from shows_api.errors import FieldError, ShowsAPIError, ValidationError
from shows_api.services.shows import ShowService
from shows_api.storage.images import ImageUpload
from shows_api.utils.logger import setup_logger

logger = setup_logger("shows_api.api.routers.shows")

router = APIRouter(tags=["Shows"])

_IMAGE_FIELD = "image"

_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}
_KEYED_RESPONSES: dict[int | str, dict[str, Any]] = {
    **_RESPONSES,
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


# =============================================================================
# DEPENDENCIES
# =============================================================================


def get_show_service(request: Request) -> ShowService:
    """Return the service built around the application's store.

    Args:
        request: Incoming request.

    Returns:
        Show service stored on ``app.state``.
    """
    return request.app.state.show_service


ShowServiceDep = Annotated[ShowService, Depends(get_show_service)]


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.post(
    "",
    response_model=ShowRead,
    status_code=status.HTTP_201_CREATED,
    responses=_RESPONSES,
    summary="Create show",
    description="Create a show from form fields with an optional image file.",
)
async def create_show(request: Request, service: ShowServiceDep) -> Any:
    """Create a show.

    Args:
        request: Multipart, urlencoded or JSON request.
        service: Show service.

    Returns:
        The created show, or the error response.
    """
    try:
        submission = await _read_submission(request, service.images.max_bytes)
        return await service.create(submission)
    except ShowsAPIError as e:
        return _error_response(request, e)


@router.get(
    "",
    response_model=list[ShowRead],
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
    summary="List shows",
    description="Get every show in store order.",
)
async def list_shows(request: Request, service: ShowServiceDep) -> Any:
    """List all shows.

    Args:
        request: Incoming request.
        service: Show service.

    Returns:
        Every row, or the error response.
    """
    try:
        return await service.list_shows()
    except ShowsAPIError as e:
        return _error_response(request, e)


@router.put(
    "/{show_id}",
    response_model=ShowUpdateResponse,
    responses=_KEYED_RESPONSES,
    summary="Update show",
    description="Replace all fields of a show; the image changes only if a file is attached.",
)
async def update_show(show_id: str, request: Request, service: ShowServiceDep) -> Any:
    """Update a show.

    Args:
        show_id: Path id as received.
        request: Multipart, urlencoded or JSON request.
        service: Show service.

    Returns:
        The submitted values, or the error response.
    """
    try:
        submission = await _read_submission(request, service.images.max_bytes)
        return await service.update(show_id, submission)
    except ShowsAPIError as e:
        return _error_response(request, e)


@router.delete(
    "/{show_id}",
    response_model=DeleteResponse,
    responses=_KEYED_RESPONSES,
    summary="Delete show",
)
async def delete_show(show_id: str, request: Request, service: ShowServiceDep) -> Any:
    """Delete a show.

    Args:
        show_id: Path id, must be an integer.
        request: Incoming request.
        service: Show service.

    Returns:
        Confirmation, or the error response.
    """
    try:
        return await service.delete(show_id)
    except ShowsAPIError as e:
        return _error_response(request, e)


# =============================================================================
# PRIVATE HELPERS
# =============================================================================


async def _read_submission(request: Request, max_bytes: int) -> ShowSubmission:
    """Extract body fields and the optional ``image`` file.

    JSON bodies carry fields only. Form bodies may carry one file under
    ``image``; an empty file input counts as no file. At most
    ``max_bytes + 1`` bytes of the file are read, enough for the size
    check to reject it.

    Args:
        request: Incoming request.
        max_bytes: Largest accepted upload.

    Returns:
        Raw submission.

    Raises:
        ValidationError: If a JSON body is malformed or not an object.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        return ShowSubmission(fields=await _read_json_object(request))

    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    upload = form.get(_IMAGE_FIELD)
    image = None
    if isinstance(upload, UploadFile) and upload.filename:
        image = ImageUpload(
            filename=upload.filename,
            content=await upload.read(max_bytes + 1),
            content_type=upload.content_type,
        )
    return ShowSubmission(fields=fields, image=image)


async def _read_json_object(request: Request) -> dict[str, Any]:
    """Decode a JSON object body."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError([FieldError(path="body", msg="Body must be valid JSON")]) from e
    if not isinstance(body, dict):
        raise ValidationError([FieldError(path="body", msg="Body must be a JSON object")])
    return body


def _error_response(request: Request, error: ShowsAPIError) -> JSONResponse:
    """Log a failure and build its response.

    Args:
        request: Request that failed.
        error: Mapped failure.

    Returns:
        JSON response with the error's status code.
    """
    if error.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {error}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {error.status_code}: {error}")
    return error.to_response()
