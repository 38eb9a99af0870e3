import base64
import hashlib

import google_crc32c
from pydantic import BaseModel, ConfigDict


class ContentDigests(BaseModel):
    """Value object holding the base64 MD5 and CRC32C digests of an object's bytes."""

    model_config = ConfigDict(frozen=True)

    md5_hash: str
    crc32c: str

    @classmethod
    def from_bytes(cls, content: bytes) -> "ContentDigests":
        md5 = hashlib.md5(content, usedforsecurity=False).digest()
        # Checksum.digest() is the big-endian 4-byte value, as GCS reports it
        crc = google_crc32c.Checksum(content).digest()
        return cls(
            md5_hash=base64.b64encode(md5).decode("ascii"),
            crc32c=base64.b64encode(crc).decode("ascii"),
        )

    @property
    def hash_header(self) -> str:
        """Value of the combined ``x-goog-hash`` header."""
        return f"crc32c={self.crc32c},md5={self.md5_hash}"
