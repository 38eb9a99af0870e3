from fastapi import HTTPException, Request, status

from application.dtos.errors import AppError

_STATUS_BY_CATEGORY = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "path_traversal": status.HTTP_400_BAD_REQUEST,
    "malformed_request": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "payload_too_large": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
}

# Describe the object, not the JSON body carrying the description
_BODY_HEADERS = frozenset({"content-type", "content-length"})


def _map_app_error_to_http_exception(error: AppError) -> HTTPException:
    """Map application layer errors to appropriate HTTP exceptions."""
    status_code = _STATUS_BY_CATEGORY.get(error.category)
    if status_code is None:
        # Unknown error category
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return HTTPException(status_code=status_code, detail=error.message)


def _metadata_headers(headers: dict[str, str]) -> dict[str, str]:
    """Object headers to attach to a JSON metadata response."""
    return {name: value for name, value in headers.items() if name.lower() not in _BODY_HEADERS}


async def _read_body(request: Request, limit: int | None) -> bytes:
    """Read the request body, stopping at the first chunk that crosses ``limit``.

    The result is longer than ``limit`` exactly when the upload is too large,
    so the caller's size check still applies without buffering the rest.
    """
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if limit is not None and len(body) > limit:
            break
    return bytes(body)
