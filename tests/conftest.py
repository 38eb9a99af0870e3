"""Shared test fixtures and configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

# Keep logs of the imported app out of the working tree
os.environ.setdefault("LOG_DIR", str(Path(__file__).resolve().parent / ".logs"))

from infrastructure.blob_stores.fsspec_blob_store import FsspecBlobStore  # noqa: E402
from tests.mocks import MockBlobStore  # noqa: E402

BASE_URL = "http://127.0.0.1:8000"


@pytest.fixture
def base_url() -> str:
    """Return the base URL used in self and media links."""
    return BASE_URL


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Return a store root that does not exist yet."""
    return tmp_path / "gcs-data"


@pytest.fixture
def blob_store(store_root: Path) -> FsspecBlobStore:
    """Create a filesystem-backed blob store over a temporary root."""
    return FsspecBlobStore(root_dir=store_root)


@pytest.fixture
def mock_blob_store() -> MockBlobStore:
    """Create an in-memory blob store."""
    return MockBlobStore()
