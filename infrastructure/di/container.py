from __future__ import annotations

from lagom import Container

from application.ports.blob_store import BlobStore
from application.use_cases.bucket_use_cases import CreateBucketUseCase, GetBucketUseCase
from application.use_cases.object_use_cases import (
    DeleteObjectUseCase,
    DownloadObjectUseCase,
    GetObjectMetadataUseCase,
    UploadObjectUseCase,
)
from infrastructure.blob_stores.fsspec_blob_store import FsspecBlobStore
from infrastructure.config import Settings, settings


def create_container(config: Settings = settings) -> Container:
    container = Container()

    container[Settings] = config

    # Blob storage (fsspec, local filesystem)
    blob_store_instance = FsspecBlobStore(root_dir=config.data_dir)
    container[BlobStore] = blob_store_instance

    # Bucket registry
    container[CreateBucketUseCase] = lambda c: CreateBucketUseCase(blob_store=c[BlobStore])
    container[GetBucketUseCase] = lambda c: GetBucketUseCase(blob_store=c[BlobStore])

    # Object store
    container[UploadObjectUseCase] = lambda c: UploadObjectUseCase(
        blob_store=c[BlobStore],
        base_url=config.base_url,
        auto_create_bucket=config.auto_create_bucket,
        max_upload_bytes=config.max_upload_bytes,
    )
    container[GetObjectMetadataUseCase] = lambda c: GetObjectMetadataUseCase(
        blob_store=c[BlobStore],
        base_url=config.base_url,
    )
    container[DownloadObjectUseCase] = lambda c: DownloadObjectUseCase(
        blob_store=c[BlobStore],
        base_url=config.base_url,
    )
    container[DeleteObjectUseCase] = lambda c: DeleteObjectUseCase(blob_store=c[BlobStore])

    return container
