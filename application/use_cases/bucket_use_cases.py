import structlog
from returns.result import Failure, Result, Success

from application.dtos.bucket_dtos import BucketResponse, CreateBucketRequest
from application.dtos.errors import AppError
from application.ports.blob_store import BlobStore
from domain.exceptions import BucketAlreadyExistsError, PathTraversalError, ValidationError

logger = structlog.get_logger()


class CreateBucketUseCase:
    """Create a bucket directory under the store root."""

    def __init__(self, blob_store: BlobStore) -> None:
        self.blob_store = blob_store

    async def execute(self, request: CreateBucketRequest) -> Result[BucketResponse, AppError]:
        if not request.name:
            return Failure(AppError("validation", "Missing bucket name"))

        try:
            self.blob_store.create_bucket(request.name)
        except BucketAlreadyExistsError:
            return Failure(AppError("conflict", f"Bucket {request.name} already exists"))
        except PathTraversalError as e:
            return Failure(AppError("path_traversal", f"Invalid bucket name: {e!s}"))
        except ValidationError as e:
            return Failure(AppError("validation", f"Validation error: {e!s}"))

        logger.info("bucket_created", bucket=request.name)
        return Success(BucketResponse(name=request.name))


class GetBucketUseCase:
    """Look up a bucket by name."""

    def __init__(self, blob_store: BlobStore) -> None:
        self.blob_store = blob_store

    async def execute(self, bucket: str) -> Result[BucketResponse, AppError]:
        try:
            if not self.blob_store.bucket_exists(bucket):
                return Failure(AppError("not_found", f"Bucket {bucket} not found"))
        except PathTraversalError as e:
            return Failure(AppError("path_traversal", f"Invalid bucket name: {e!s}"))
        except ValidationError as e:
            return Failure(AppError("validation", f"Validation error: {e!s}"))

        return Success(BucketResponse(name=bucket))
