"""Helpers for building request bodies in tests."""

from __future__ import annotations


def build_multipart_body(
    boundary: str,
    parts: list[tuple[dict[str, str], bytes]],
    newline: bytes = b"\r\n",
) -> bytes:
    """Assemble a multipart/related body from (headers, body) pairs."""
    chunks: list[bytes] = []
    for headers, body in parts:
        chunks.append(b"--" + boundary.encode() + newline)
        for name, value in headers.items():
            chunks.append(f"{name}: {value}".encode() + newline)
        chunks.append(newline)
        chunks.append(body + newline)
    chunks.append(b"--" + boundary.encode() + b"--" + newline)
    return b"".join(chunks)
