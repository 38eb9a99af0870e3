from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class BlobStat:
    size_bytes: int
    mtime: float  # seconds since the epoch


class BlobStore(Protocol):
    """Bucket directories and object files under a single store root.

    Every bucket name and object key is resolved within the root; names that
    escape it raise ``PathTraversalError``.
    """

    def ensure_root(self) -> None: ...
    def bucket_exists(self, bucket: str) -> bool: ...
    def create_bucket(self, bucket: str) -> None:
        """Create the bucket directory.

        Raises BucketAlreadyExistsError if it already exists.
        """
        ...

    def ensure_bucket(self, bucket: str) -> bool:
        """Create the bucket directory only if absent. Returns True when created."""
        ...

    def locate(self, bucket: str, key: str) -> str:
        """Resolve an object's location without touching the filesystem."""
        ...

    def exists(self, bucket: str, key: str) -> bool: ...
    def put_bytes(self, bucket: str, key: str, data: bytes) -> None: ...
    def get_bytes(self, bucket: str, key: str) -> bytes: ...
    def stat(self, bucket: str, key: str) -> BlobStat: ...
    def iter_chunks(self, bucket: str, key: str, chunk_size: int = ...) -> Iterator[bytes]: ...
    def delete(self, bucket: str, key: str) -> None: ...
