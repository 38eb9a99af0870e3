from .content_digests import ContentDigests
from .mime_type import MimeType

__all__ = [
    "ContentDigests",
    "MimeType",
]
