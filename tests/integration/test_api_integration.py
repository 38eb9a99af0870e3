"""Integration tests for the API over a real temporary store root."""

from __future__ import annotations

import base64
import hashlib
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from application.ports.blob_store import BlobStore
from application.use_cases.bucket_use_cases import CreateBucketUseCase, GetBucketUseCase
from application.use_cases.object_use_cases import (
    DeleteObjectUseCase,
    DownloadObjectUseCase,
    GetObjectMetadataUseCase,
    UploadObjectUseCase,
)
from domain.value_objects.content_digests import ContentDigests
from infrastructure.blob_stores.fsspec_blob_store import FsspecBlobStore
from infrastructure.config import Settings
from infrastructure.di.container import create_container
from interfaces.api.main import app
from interfaces.dependencies import get_container
from tests.helpers import build_multipart_body

BASE_URL = "http://127.0.0.1:8000"


class SimpleContainer:
    def __init__(self, mapping: dict[type, object]) -> None:
        self._mapping = mapping

    def __getitem__(self, key: type) -> object:
        return self._mapping[key]


def _build_use_cases(blob_store: BlobStore, *, auto_create_bucket: bool = True) -> dict[type, object]:
    return {
        BlobStore: blob_store,
        CreateBucketUseCase: CreateBucketUseCase(blob_store),
        GetBucketUseCase: GetBucketUseCase(blob_store),
        UploadObjectUseCase: UploadObjectUseCase(
            blob_store,
            BASE_URL,
            auto_create_bucket=auto_create_bucket,
            max_upload_bytes=1024 * 1024,
        ),
        GetObjectMetadataUseCase: GetObjectMetadataUseCase(blob_store, BASE_URL),
        DownloadObjectUseCase: DownloadObjectUseCase(blob_store, BASE_URL),
        DeleteObjectUseCase: DeleteObjectUseCase(blob_store),
    }


@pytest.fixture
def client(store_root: Path) -> Iterator[Callable[..., TestClient]]:
    def _client(*, auto_create_bucket: bool = True) -> TestClient:
        store = FsspecBlobStore(root_dir=store_root)
        container = SimpleContainer(_build_use_cases(store, auto_create_bucket=auto_create_bucket))
        app.dependency_overrides[get_container] = lambda: container
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()


@pytest.fixture
def api(client: Callable[..., TestClient]) -> TestClient:
    return client()


def _upload(api: TestClient, bucket: str, name: str, data: bytes, content_type: str | None = None):
    headers = {"Content-Type": content_type} if content_type else {}
    return api.post(
        f"/upload/storage/v1/b/{bucket}/o",
        params={"uploadType": "media", "name": name},
        content=data,
        headers=headers,
    )


def test_end_to_end_create_put_get_delete(api: TestClient, store_root: Path) -> None:
    create = api.post("/storage/v1/b", json={"name": "docs"})
    assert create.status_code == 200
    assert create.json() == {"name": "docs", "kind": "storage#bucket"}

    upload = _upload(api, "docs", "a/b.txt", b"hello")
    assert upload.status_code == 200
    assert (store_root / "docs" / "a" / "b.txt").read_bytes() == b"hello"

    metadata = api.get("/storage/v1/b/docs/o/a%2Fb.txt")
    assert metadata.status_code == 200
    resource = metadata.json()
    md5 = base64.b64encode(hashlib.md5(b"hello").digest()).decode()  # noqa: S324
    assert resource["size"] == "5"
    assert resource["contentType"] == "application/octet-stream"
    assert resource["etag"] == md5
    assert metadata.headers["etag"] == f'"{md5}"'
    assert resource["selfLink"] == f"{BASE_URL}/storage/v1/b/docs/o/a%2Fb.txt"

    delete = api.delete("/storage/v1/b/docs/o/a%2Fb.txt")
    assert delete.status_code == 204
    assert delete.content == b""

    missing = api.get("/storage/v1/b/docs/o/a%2Fb.txt")
    assert missing.status_code == 404
    assert missing.json() == {"error": {"code": 404, "message": "Object not found"}}


def test_create_bucket_conflict(api: TestClient) -> None:
    assert api.post("/storage/v1/b", json={"name": "x"}).status_code == 200

    second = api.post("/storage/v1/b", json={"name": "x"})

    assert second.status_code == 409
    assert second.json() == {"error": {"code": 409, "message": "Bucket x already exists"}}


def test_create_bucket_missing_name(api: TestClient) -> None:
    response = api.post("/storage/v1/b", json={})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing bucket name"


@pytest.mark.parametrize("name", ["a/b", "x/../y"])
def test_create_bucket_rejects_nested_name(api: TestClient, store_root: Path, name: str) -> None:
    response = api.post("/storage/v1/b", json={"name": name})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == 400
    assert not (store_root / "a").exists()
    assert not (store_root / "y").exists()


def test_create_bucket_ignores_extra_fields(api: TestClient) -> None:
    response = api.post("/storage/v1/b", params={"project": "p"}, json={"name": "x", "location": "US"})

    assert response.status_code == 200


def test_get_bucket(api: TestClient) -> None:
    assert api.get("/storage/v1/b/docs").status_code == 404

    api.post("/storage/v1/b", json={"name": "docs"})

    assert api.get("/storage/v1/b/docs").json() == {"name": "docs", "kind": "storage#bucket"}


def test_upload_headers_and_declared_content_type(api: TestClient) -> None:
    response = _upload(api, "docs", "notes.txt", b"hello", content_type="text/plain")

    assert response.status_code == 200
    digests = ContentDigests.from_bytes(b"hello")
    assert response.json()["contentType"] == "text/plain"
    assert response.headers["x-goog-hash"] == f"crc32c={digests.crc32c},md5={digests.md5_hash}"
    assert response.headers["x-goog-stored-content-encoding"] == "identity"
    assert response.headers["x-goog-generation"] == response.json()["generation"]
    assert response.headers["content-type"].startswith("application/json")


def test_upload_missing_name(api: TestClient) -> None:
    response = api.post("/upload/storage/v1/b/docs/o", content=b"x")

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing object name"


def test_upload_too_large(api: TestClient, store_root: Path) -> None:
    response = _upload(api, "docs", "big", b"x" * (1024 * 1024 + 1))

    assert response.status_code == 413
    assert not (store_root / "docs").exists()


def test_upload_without_auto_create(client: Callable[..., TestClient], store_root: Path) -> None:
    api = client(auto_create_bucket=False)

    response = _upload(api, "nope", "k", b"x")

    assert response.status_code == 404
    assert not (store_root / "nope").exists()


def test_multipart_upload(api: TestClient) -> None:
    body = build_multipart_body(
        "boundary42",
        [
            ({"Content-Type": "application/json; charset=UTF-8"}, b'{"name":"a.txt","contentType":"text/plain"}'),
            ({}, b"multipart payload"),
        ],
    )

    response = _upload(api, "docs", "a.txt", body, content_type='multipart/related; boundary="boundary42"')

    assert response.status_code == 200
    assert response.json()["contentType"] == "text/plain"
    assert response.json()["size"] == str(len(b"multipart payload"))
    assert api.get("/download/storage/v1/b/docs/o/a.txt").content == b"multipart payload"


def test_multipart_upload_with_non_ascii_content_type(api: TestClient) -> None:
    body = build_multipart_body(
        "boundary42",
        [({"Content-Type": "application/json"}, '{"contentType":"text/✓"}'.encode()), ({}, b"payload")],
    )

    response = _upload(api, "docs", "a.txt", body, content_type="multipart/related; boundary=boundary42")

    assert response.status_code == 200
    assert response.json()["contentType"] == "application/octet-stream"
    assert response.headers["content-type"].startswith("application/json")


def test_malformed_multipart_upload(api: TestClient, store_root: Path) -> None:
    response = _upload(api, "docs", "a.txt", b"no parts here", content_type="multipart/related; boundary=zz")

    assert response.status_code == 400
    assert not (store_root / "docs").exists()


def test_traversal_upload_rejected(api: TestClient, store_root: Path) -> None:
    response = _upload(api, "docs", "../../escape.txt", b"x")

    assert response.status_code == 400
    assert not (store_root.parent / "escape.txt").exists()


@pytest.mark.parametrize(
    "path",
    ["/storage/v1/b/docs/o/a.txt?alt=media", "/download/storage/v1/b/docs/o/a.txt"],
)
def test_download_round_trip(api: TestClient, path: str) -> None:
    payload = bytes(range(256)) * 600
    _upload(api, "docs", "a.txt", payload)

    response = api.get(path)

    assert response.status_code == 200
    assert response.content == payload
    assert response.headers["content-length"] == str(len(payload))
    assert response.headers["content-type"] == "application/octet-stream"
    assert response.headers["etag"] == f'"{ContentDigests.from_bytes(payload).md5_hash}"'


def test_csv_content_type_inferred_on_read(api: TestClient) -> None:
    _upload(api, "docs", "tables/report.csv", b"a,b\n")

    response = api.get("/download/storage/v1/b/docs/o/tables%2Freport.csv")

    assert response.headers["content-type"].startswith("text/csv")


def test_metadata_reflects_overwrite(api: TestClient) -> None:
    _upload(api, "docs", "k", b"one")
    _upload(api, "docs", "k", b"two!")

    resource = api.get("/storage/v1/b/docs/o/k").json()

    assert resource["size"] == "4"
    assert resource["md5Hash"] == ContentDigests.from_bytes(b"two!").md5_hash


def test_download_and_delete_missing(api: TestClient) -> None:
    assert api.get("/download/storage/v1/b/docs/o/nope").status_code == 404
    assert api.delete("/storage/v1/b/docs/o/nope").status_code == 404


def test_health(api: TestClient) -> None:
    assert api.get("/health").json() == {"status": "healthy"}


def test_container_wiring(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GCS_DIR", str(tmp_path / "wired"))
    monkeypatch.setenv("BASE_URL", "http://storage.test")

    container = create_container(Settings())
    app.dependency_overrides[get_container] = lambda: container
    try:
        api = TestClient(app)
        upload = _upload(api, "docs", "k.txt", b"abc")
    finally:
        app.dependency_overrides.clear()

    assert upload.status_code == 200
    assert upload.json()["mediaLink"] == "http://storage.test/download/storage/v1/b/docs/o/k.txt?alt=media"
    assert (tmp_path / "wired" / "docs" / "k.txt").read_bytes() == b"abc"
