from datetime import UTC, datetime, timedelta
from email.utils import format_datetime
from urllib.parse import quote

from application.dtos.object_dtos import ObjectMetadata, ObjectResource
from application.ports.blob_store import BlobStat
from domain.value_objects.content_digests import ContentDigests
from domain.value_objects.mime_type import MimeType

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URL_COMPONENT_SAFE = "!'()*"
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def infer_content_type(key: str) -> str:
    if key.endswith(".csv"):
        return MimeType.CSV.value
    return MimeType.OCTET_STREAM.value


def encode_object_key(key: str) -> str:
    """Percent-encode a key for use in a link; "/" stays encoded as %2F."""
    return quote(key, safe=_URL_COMPONENT_SAFE)


def _iso_timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ObjectMapper:
    """Synthesizes an object's resource representation from its bytes and file stats."""

    @staticmethod
    def to_object_metadata(
        bucket: str,
        key: str,
        content: bytes,
        stat: BlobStat,
        base_url: str,
        content_type: str | None = None,
    ) -> ObjectMetadata:
        """Build the JSON resource and matching response headers for an object.

        Args:
            bucket: Name of the containing bucket
            key: Object key within the bucket
            content: The object's current bytes
            stat: File stats taken alongside ``content``
            base_url: Scheme, host and port used for self and media links
            content_type: Explicit content type, inferred from the key when omitted

        Returns:
            ObjectMetadata: The resource document and its headers

        """
        digests = ContentDigests.from_bytes(content)
        resolved_type = content_type or infer_content_type(key)

        encoded = encode_object_key(key)
        base = base_url.rstrip("/")

        modified = datetime.fromtimestamp(stat.mtime, tz=UTC)
        timestamp = _iso_timestamp(modified)
        generation = str((modified - _EPOCH) // timedelta(milliseconds=1))
        size = str(stat.size_bytes)

        resource = ObjectResource(
            id=f"{bucket}/{key}",
            bucket=bucket,
            name=key,
            size=size,
            content_type=resolved_type,
            md5_hash=digests.md5_hash,
            crc32c=digests.crc32c,
            etag=digests.md5_hash,
            self_link=f"{base}/storage/v1/b/{bucket}/o/{encoded}",
            media_link=f"{base}/download/storage/v1/b/{bucket}/o/{encoded}?alt=media",
            time_created=timestamp,
            updated=timestamp,
            generation=generation,
        )

        headers = {
            "ETag": f'"{digests.md5_hash}"',
            "x-goog-hash": digests.hash_header,
            "X-Goog-Generation": generation,
            "X-Goog-Stored-Content-Encoding": "identity",
            "Last-Modified": format_datetime(modified, usegmt=True),
            "Content-Type": resolved_type,
            "Content-Length": size,
        }

        return ObjectMetadata(resource=resource, headers=headers)
