from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse, StreamingResponse
from lagom import Container

from application.dtos.object_dtos import ObjectMedia, ObjectMetadata
from application.use_cases.object_use_cases import (
    DeleteObjectUseCase,
    DownloadObjectUseCase,
    GetObjectMetadataUseCase,
    UploadObjectUseCase,
)
from interfaces.api.middleware import handle_use_case_errors
from interfaces.api.routes.helpers import _metadata_headers, _read_body
from interfaces.dependencies import get_container

router = APIRouter(tags=["objects"])


def _metadata_response(metadata: ObjectMetadata) -> Response:
    return JSONResponse(
        content=metadata.resource.to_json(),
        headers=_metadata_headers(metadata.headers),
    )


def _media_response(media: ObjectMedia) -> Response:
    return StreamingResponse(media.chunks, headers=media.headers)


@router.post("/upload/storage/v1/b/{bucket}/o", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def upload_object(
    bucket: str,
    request: Request,
    container: Annotated[Container, Depends(get_container)],
    name: Annotated[str | None, Query()] = None,
) -> Response:
    """Upload an object from a media or multipart/related body.

    Returns:
        200 OK: Object stored, body is the object resource
        400 Bad Request: Missing name, invalid path or undecodable multipart body
        404 Not Found: Bucket missing and auto-creation disabled
        413 Request Entity Too Large: Body exceeds the configured limit

    """
    use_case = container[UploadObjectUseCase]
    body = await _read_body(request, use_case.max_upload_bytes)
    result = await use_case.execute(
        bucket=bucket,
        name=name,
        body=body,
        content_type=request.headers.get("content-type"),
    )
    return result.map(_metadata_response)


@router.get("/storage/v1/b/{bucket}/o/{object_name:path}", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def get_object(
    bucket: str,
    object_name: str,
    container: Annotated[Container, Depends(get_container)],
    alt: Annotated[str | None, Query()] = None,
) -> Response:
    """Return the object resource, or its content when ``alt=media``."""
    if alt == "media":
        download = container[DownloadObjectUseCase]
        result = await download.execute(bucket, object_name)
        return result.map(_media_response)

    use_case = container[GetObjectMetadataUseCase]
    result = await use_case.execute(bucket, object_name)
    return result.map(_metadata_response)


@router.get("/download/storage/v1/b/{bucket}/o/{object_name:path}", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def download_object(
    bucket: str,
    object_name: str,
    container: Annotated[Container, Depends(get_container)],
) -> Response:
    """Stream the object's content."""
    use_case = container[DownloadObjectUseCase]
    result = await use_case.execute(bucket, object_name)
    return result.map(_media_response)


@router.delete("/storage/v1/b/{bucket}/o/{object_name:path}", status_code=status.HTTP_204_NO_CONTENT)
@handle_use_case_errors
async def delete_object(
    bucket: str,
    object_name: str,
    container: Annotated[Container, Depends(get_container)],
) -> Response:
    """Delete an object.

    Returns:
        204 No Content: Object deleted
        404 Not Found: Object does not exist

    """
    use_case = container[DeleteObjectUseCase]
    result = await use_case.execute(bucket, object_name)
    return result.map(lambda _: Response(status_code=status.HTTP_204_NO_CONTENT))
