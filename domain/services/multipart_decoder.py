"""Decoder for ``multipart/related`` upload bodies.

Storage clients send simple uploads as two parts: a JSON metadata part and a
media part carrying the object bytes. Only the media bytes and an effective
content type are extracted; the rest of the metadata is ignored.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

import structlog

from domain.exceptions import MalformedRequestError
from domain.value_objects.mime_type import MimeType

logger = structlog.get_logger()

_BOUNDARY_RE = re.compile(r'boundary=(?:"([^"]+)"|([^;]+))', re.IGNORECASE)
_BLANK_LINE_RE = re.compile(rb"\r?\n\r?\n")
_HEADER_LINE_RE = re.compile(r"\r?\n")


@dataclass(frozen=True)
class MultipartPart:
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type") or None

    @property
    def is_json(self) -> bool:
        return MimeType.JSON.value in (self.content_type or "").lower()


@dataclass(frozen=True)
class DecodedUpload:
    media: bytes
    content_type: str


def is_multipart_related(content_type_header: str | None) -> bool:
    return (content_type_header or "").strip().lower().startswith(MimeType.MULTIPART_RELATED.value)


def extract_boundary(content_type_header: str | None) -> str:
    match = _BOUNDARY_RE.search(content_type_header or "")
    if match is None:
        msg = "multipart boundary not found"
        raise MalformedRequestError(msg)
    boundary = (match.group(1) or match.group(2)).strip()
    if not boundary:
        msg = "multipart boundary is empty"
        raise MalformedRequestError(msg)
    return boundary


def _trim_line_terminators(segment: bytes) -> bytes:
    # Only the terminators framing the segment; payload bytes are kept as-is
    if segment.startswith(b"\r\n"):
        segment = segment[2:]
    elif segment.startswith(b"\n"):
        segment = segment[1:]
    if segment.endswith(b"\r\n"):
        segment = segment[:-2]
    elif segment.endswith(b"\n"):
        segment = segment[:-1]
    return segment


def split_segments(raw: bytes, boundary: str) -> list[bytes]:
    """Return the segments found between consecutive ``--boundary`` markers."""
    marker = b"--" + boundary.encode("utf-8")
    segments: list[bytes] = []

    start = raw.find(marker)
    while start != -1:
        body_start = start + len(marker)
        end = raw.find(marker, body_start)
        if end == -1:
            break
        segments.append(_trim_line_terminators(raw[body_start:end]))
        start = end

    return segments


def parse_part(segment: bytes) -> MultipartPart:
    """Split a segment at its first blank line into headers and body."""
    # A segment opening on an empty line has an empty header block
    if segment.startswith(b"\r\n"):
        return MultipartPart(body=segment[2:])
    if segment.startswith(b"\n"):
        return MultipartPart(body=segment[1:])

    separator = _BLANK_LINE_RE.search(segment)
    if separator is None:
        return MultipartPart(body=segment)

    raw_headers = segment[: separator.start()].decode("utf-8", errors="replace")
    headers: dict[str, str] = {}
    for line in _HEADER_LINE_RE.split(raw_headers):
        name, colon, value = line.partition(":")
        name = name.strip()
        if colon and name:
            headers[name.lower()] = value.strip()

    return MultipartPart(headers=headers, body=segment[separator.end() :])


def _metadata_content_type(metadata: MultipartPart) -> str | None:
    try:
        document = json.loads(metadata.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("multipart_metadata_unparseable", error=str(e))
        return None

    if isinstance(document, dict) and isinstance(document.get("contentType"), str):
        return document["contentType"]
    return None


def _header_safe(content_type: str | None) -> str | None:
    # Becomes a response header value
    if content_type is None or (content_type.isascii() and content_type.isprintable()):
        return content_type
    logger.warning("multipart_content_type_rejected", content_type=content_type)
    return None


def decode_multipart_related(raw: bytes, content_type_header: str | None) -> DecodedUpload:
    """Extract the media payload and its content type from a multipart body.

    Args:
        raw: The request body exactly as received
        content_type_header: The request ``Content-Type`` carrying ``boundary=``

    Returns:
        DecodedUpload with the media bytes and the effective content type

    Raises:
        MalformedRequestError: If the boundary, the parts or the media are missing

    """
    boundary = extract_boundary(content_type_header)

    segments = split_segments(raw, boundary)
    if not segments:
        msg = "no multipart parts found"
        raise MalformedRequestError(msg)

    metadata: MultipartPart | None = None
    media: MultipartPart | None = None
    for segment in segments:
        part = parse_part(segment)
        if part.is_json:
            if metadata is None:
                metadata = part
        elif media is None:
            media = part

    if media is None:
        # JSON-only body: the metadata part is the payload
        media = metadata
    if media is None:
        msg = "multipart missing media part"
        raise MalformedRequestError(msg)

    fallback = _metadata_content_type(metadata) if metadata is not None else None
    content_type = (
        _header_safe(media.content_type) or _header_safe(fallback) or MimeType.OCTET_STREAM.value
    )

    return DecodedUpload(media=media.body, content_type=content_type)
