"""Mock implementations for testing."""

from __future__ import annotations

from collections.abc import Iterator

from application.ports.blob_store import BlobStat, BlobStore
from domain.exceptions import BucketAlreadyExistsError, ObjectNotFoundError, ValidationError
from domain.services.path_resolver import resolve_path

MOCK_ROOT = "/mock-store"


class MockBlobStore(BlobStore):
    """In-memory BlobStore keyed by resolved object location."""

    def __init__(self, mtime: float = 1_700_000_000.123) -> None:
        self.buckets: set[str] = set()
        self.objects: dict[str, bytes] = {}
        self.mtime = mtime
        self.root_ensured = False
        self.put_calls: list[tuple[str, str, bytes]] = []
        self.delete_calls: list[tuple[str, str]] = []

    def _bucket_path(self, bucket: str) -> str:
        path = resolve_path(MOCK_ROOT, bucket)
        if str(path) == MOCK_ROOT:
            msg = f"Bucket name {bucket!r} does not name a directory below the store root"
            raise ValidationError(msg)
        if "/" in bucket or str(path.parent) != MOCK_ROOT:
            msg = f"Bucket name {bucket!r} must be a single path segment"
            raise ValidationError(msg)
        return str(path)

    def ensure_root(self) -> None:
        self.root_ensured = True

    def bucket_exists(self, bucket: str) -> bool:
        return self._bucket_path(bucket) in self.buckets

    def create_bucket(self, bucket: str) -> None:
        path = self._bucket_path(bucket)
        if path in self.buckets:
            raise BucketAlreadyExistsError(bucket)
        self.buckets.add(path)

    def ensure_bucket(self, bucket: str) -> bool:
        path = self._bucket_path(bucket)
        created = path not in self.buckets
        self.buckets.add(path)
        return created

    def locate(self, bucket: str, key: str) -> str:
        bucket_path = self._bucket_path(bucket)
        path = resolve_path(bucket_path, key)
        if str(path) == bucket_path:
            msg = f"Object name {key!r} does not name a file inside bucket {bucket!r}"
            raise ValidationError(msg)
        return str(path)

    def exists(self, bucket: str, key: str) -> bool:
        return self.locate(bucket, key) in self.objects

    def put_bytes(self, bucket: str, key: str, data: bytes) -> None:
        self.put_calls.append((bucket, key, data))
        self.objects[self.locate(bucket, key)] = data

    def get_bytes(self, bucket: str, key: str) -> bytes:
        location = self.locate(bucket, key)
        if location not in self.objects:
            raise ObjectNotFoundError(f"{bucket}/{key}")
        return self.objects[location]

    def stat(self, bucket: str, key: str) -> BlobStat:
        return BlobStat(size_bytes=len(self.get_bytes(bucket, key)), mtime=self.mtime)

    def iter_chunks(self, bucket: str, key: str, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
        data = self.get_bytes(bucket, key)
        return iter([data[i : i + chunk_size] for i in range(0, len(data), chunk_size)])

    def delete(self, bucket: str, key: str) -> None:
        self.delete_calls.append((bucket, key))
        location = self.locate(bucket, key)
        if location not in self.objects:
            raise ObjectNotFoundError(f"{bucket}/{key}")
        del self.objects[location]
