from typing import Annotated

from fastapi import APIRouter, Depends, status
from lagom import Container

from application.dtos.bucket_dtos import BucketResponse, CreateBucketRequest
from application.use_cases.bucket_use_cases import CreateBucketUseCase, GetBucketUseCase
from interfaces.api.middleware import handle_use_case_errors
from interfaces.dependencies import get_container

router = APIRouter(prefix="/storage/v1/b", tags=["buckets"])


@router.post("", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def create_bucket(
    request: CreateBucketRequest,
    container: Annotated[Container, Depends(get_container)],
) -> BucketResponse:
    """Create a bucket.

    Returns:
        200 OK: Bucket created
        400 Bad Request: Missing or invalid bucket name
        409 Conflict: Bucket already exists

    """
    use_case = container[CreateBucketUseCase]
    return await use_case.execute(request)


@router.get("/{bucket}", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def get_bucket(
    bucket: str,
    container: Annotated[Container, Depends(get_container)],
) -> BucketResponse:
    """Return the bucket resource if its directory exists."""
    use_case = container[GetBucketUseCase]
    return await use_case.execute(bucket)
