from enum import Enum


class MimeType(str, Enum):
    """Represent the content types the emulator assigns or recognizes."""

    OCTET_STREAM = "application/octet-stream"
    CSV = "text/csv"
    JSON = "application/json"
    MULTIPART_RELATED = "multipart/related"
