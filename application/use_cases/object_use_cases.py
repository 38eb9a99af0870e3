from typing import Any

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from application.dtos.object_dtos import ObjectMedia, ObjectMetadata
from application.mappers.object_mappers import ObjectMapper
from application.ports.blob_store import BlobStore
from domain.exceptions import (
    MalformedRequestError,
    ObjectNotFoundError,
    PathTraversalError,
    ValidationError,
)
from domain.services.multipart_decoder import decode_multipart_related, is_multipart_related

logger = structlog.get_logger()

OBJECT_NOT_FOUND = "Object not found"
DOWNLOAD_CHUNK_SIZE = 64 * 1024


def _describe_object(
    blob_store: BlobStore,
    base_url: str,
    bucket: str,
    key: str,
    content_type: str | None = None,
) -> ObjectMetadata:
    # Always recomputed from the bytes on disk
    stat = blob_store.stat(bucket, key)
    content = blob_store.get_bytes(bucket, key)
    return ObjectMapper.to_object_metadata(
        bucket=bucket,
        key=key,
        content=content,
        stat=stat,
        base_url=base_url,
        content_type=content_type,
    )


def _failure_for(error: Exception) -> Result[Any, AppError]:
    if isinstance(error, ObjectNotFoundError):
        return Failure(AppError("not_found", OBJECT_NOT_FOUND))
    if isinstance(error, PathTraversalError):
        return Failure(AppError("path_traversal", f"Invalid object path: {error!s}"))
    if isinstance(error, MalformedRequestError):
        return Failure(AppError("malformed_request", f"Malformed multipart body: {error!s}"))
    return Failure(AppError("validation", f"Validation error: {error!s}"))


class UploadObjectUseCase:
    """Write an object's content from a simple or multipart/related upload body.

    Decoding and path resolution happen before anything is written, so a
    rejected upload leaves the filesystem untouched.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        base_url: str,
        *,
        auto_create_bucket: bool = True,
        max_upload_bytes: int | None = None,
    ) -> None:
        self.blob_store = blob_store
        self.base_url = base_url
        self.auto_create_bucket = auto_create_bucket
        self.max_upload_bytes = max_upload_bytes

    async def execute(
        self,
        bucket: str,
        name: str | None,
        body: bytes,
        content_type: str | None = None,
    ) -> Result[ObjectMetadata, AppError]:
        """Store ``body`` at ``bucket/name``, replacing any previous content.

        Args:
            bucket: Target bucket name
            name: Object key, may contain slashes
            body: Raw request body
            content_type: Request ``Content-Type`` header

        Returns:
            Result containing the freshly synthesized object metadata or an error

        """
        if not bucket:
            return Failure(AppError("validation", "Missing bucket name"))
        if not name:
            return Failure(AppError("validation", "Missing object name"))
        if self.max_upload_bytes is not None and len(body) > self.max_upload_bytes:
            return Failure(
                AppError("payload_too_large", f"Upload exceeds {self.max_upload_bytes} bytes"),
            )

        try:
            payload, payload_type = body, content_type or None
            if is_multipart_related(content_type):
                decoded = decode_multipart_related(body, content_type)
                payload, payload_type = decoded.media, decoded.content_type

            self.blob_store.locate(bucket, name)

            if not self.blob_store.bucket_exists(bucket):
                if not self.auto_create_bucket:
                    return Failure(AppError("not_found", f"Bucket {bucket} not found"))
                self.blob_store.ensure_bucket(bucket)
                logger.info("bucket_auto_created", bucket=bucket)

            self.blob_store.put_bytes(bucket, name, payload)
            metadata = _describe_object(
                self.blob_store,
                self.base_url,
                bucket,
                name,
                content_type=payload_type,
            )
        except (
            MalformedRequestError,
            ObjectNotFoundError,
            PathTraversalError,
            ValidationError,
        ) as e:
            return _failure_for(e)

        logger.info(
            "object_uploaded",
            bucket=bucket,
            name=name,
            size_bytes=len(payload),
            content_type=metadata.resource.content_type,
        )
        return Success(metadata)


class GetObjectMetadataUseCase:
    """Describe an existing object."""

    def __init__(self, blob_store: BlobStore, base_url: str) -> None:
        self.blob_store = blob_store
        self.base_url = base_url

    async def execute(self, bucket: str, name: str) -> Result[ObjectMetadata, AppError]:
        try:
            if not self.blob_store.exists(bucket, name):
                return Failure(AppError("not_found", OBJECT_NOT_FOUND))
            return Success(_describe_object(self.blob_store, self.base_url, bucket, name))
        except (ObjectNotFoundError, PathTraversalError, ValidationError) as e:
            return _failure_for(e)


class DownloadObjectUseCase:
    """Stream an existing object's content together with its headers."""

    def __init__(self, blob_store: BlobStore, base_url: str) -> None:
        self.blob_store = blob_store
        self.base_url = base_url

    async def execute(self, bucket: str, name: str) -> Result[ObjectMedia, AppError]:
        try:
            if not self.blob_store.exists(bucket, name):
                return Failure(AppError("not_found", OBJECT_NOT_FOUND))
            metadata = _describe_object(self.blob_store, self.base_url, bucket, name)
        except (ObjectNotFoundError, PathTraversalError, ValidationError) as e:
            return _failure_for(e)

        return Success(
            ObjectMedia(
                headers=metadata.headers,
                chunks=self.blob_store.iter_chunks(bucket, name, DOWNLOAD_CHUNK_SIZE),
            ),
        )


class DeleteObjectUseCase:
    """Remove an object's backing file."""

    def __init__(self, blob_store: BlobStore) -> None:
        self.blob_store = blob_store

    async def execute(self, bucket: str, name: str) -> Result[None, AppError]:
        try:
            if not self.blob_store.exists(bucket, name):
                return Failure(AppError("not_found", OBJECT_NOT_FOUND))
            self.blob_store.delete(bucket, name)
        except (ObjectNotFoundError, PathTraversalError, ValidationError) as e:
            return _failure_for(e)

        logger.info("object_deleted", bucket=bucket, name=name)
        return Success(None)
