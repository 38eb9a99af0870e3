from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import fsspec

from application.ports.blob_store import BlobStat, BlobStore
from domain.exceptions import (
    BucketAlreadyExistsError,
    InfrastructureError,
    ObjectNotFoundError,
    ValidationError,
)
from domain.services.path_resolver import resolve_path

if TYPE_CHECKING:
    from collections.abc import Iterator

_SEPARATORS = {sep for sep in ("/", os.sep, os.altsep) if sep}


class FsspecBlobStore(BlobStore):
    """Buckets as directories and objects as files under ``root_dir``.

    Layout is ``{root_dir}/{bucket}/{key}``; keys may contain slashes, which
    become nested directories. No sidecar metadata is written.
    """

    def __init__(self, root_dir: str | Path, *, storage_options: dict | None = None) -> None:
        self.root_dir = Path(root_dir).expanduser().resolve()
        self.fs = fsspec.filesystem("file", **(storage_options or {}))

    def _bucket_path(self, bucket: str) -> Path:
        path = resolve_path(self.root_dir, bucket)
        if path == self.root_dir:
            msg = f"Bucket name {bucket!r} does not name a directory below the store root"
            raise ValidationError(msg)
        if any(sep in bucket for sep in _SEPARATORS) or path.parent != self.root_dir:
            msg = f"Bucket name {bucket!r} must be a single path segment"
            raise ValidationError(msg)
        return path

    def _object_path(self, bucket: str, key: str) -> Path:
        bucket_path = self._bucket_path(bucket)
        path = resolve_path(bucket_path, key)
        if path == bucket_path:
            msg = f"Object name {key!r} does not name a file inside bucket {bucket!r}"
            raise ValidationError(msg)
        return path

    def ensure_root(self) -> None:
        self.fs.makedirs(str(self.root_dir), exist_ok=True)

    def bucket_exists(self, bucket: str) -> bool:
        return self.fs.isdir(str(self._bucket_path(bucket)))

    def create_bucket(self, bucket: str) -> None:
        path = self._bucket_path(bucket)
        if self.fs.exists(str(path)):
            msg = f"Bucket {bucket} already exists"
            raise BucketAlreadyExistsError(msg)
        self.ensure_root()
        self.fs.makedirs(str(path), exist_ok=True)

    def ensure_bucket(self, bucket: str) -> bool:
        path = self._bucket_path(bucket)
        if self.fs.isdir(str(path)):
            return False
        self.fs.makedirs(str(path), exist_ok=True)
        return True

    def locate(self, bucket: str, key: str) -> str:
        return str(self._object_path(bucket, key))

    def exists(self, bucket: str, key: str) -> bool:
        return self.fs.isfile(str(self._object_path(bucket, key)))

    def put_bytes(self, bucket: str, key: str, data: bytes) -> None:
        path = self._object_path(bucket, key)
        try:
            self.fs.makedirs(str(path.parent), exist_ok=True)
            with self.fs.open(str(path), "wb") as out:
                out.write(data)
        except OSError as e:
            msg = f"Failed to write {bucket}/{key}: {e!s}"
            raise InfrastructureError(msg) from e

    def get_bytes(self, bucket: str, key: str) -> bytes:
        path = self._object_path(bucket, key)
        try:
            with self.fs.open(str(path), "rb") as f:
                return f.read()
        except FileNotFoundError as e:
            raise ObjectNotFoundError(f"{bucket}/{key}") from e

    def stat(self, bucket: str, key: str) -> BlobStat:
        path = self._object_path(bucket, key)
        try:
            info = self.fs.info(str(path))
        except FileNotFoundError as e:
            raise ObjectNotFoundError(f"{bucket}/{key}") from e
        return BlobStat(size_bytes=int(info["size"]), mtime=float(info["mtime"]))

    def iter_chunks(self, bucket: str, key: str, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
        """Lazily yield the object's content; the file is opened on first iteration."""
        path = self._object_path(bucket, key)

        def _read() -> Iterator[bytes]:
            with self.fs.open(str(path), "rb") as f:
                while True:
                    chunk = f.read(chunk_size)
                    if not chunk:
                        break
                    yield chunk

        return _read()

    def delete(self, bucket: str, key: str) -> None:
        path = self._object_path(bucket, key)
        try:
            self.fs.rm_file(str(path))
        except FileNotFoundError as e:
            raise ObjectNotFoundError(f"{bucket}/{key}") from e
