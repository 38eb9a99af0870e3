"""Tests for reading upload bodies in routes."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from interfaces.api.routes.helpers import _read_body


class ChunkedRequest:
    """Request stand-in that records how much of its body was pulled."""

    def __init__(self, chunks: list[bytes]) -> None:
        self.chunks = chunks
        self.consumed = 0

    async def stream(self) -> AsyncIterator[bytes]:
        for chunk in self.chunks:
            self.consumed += 1
            yield chunk


class TestReadBody:
    """Test the size-capped body reader."""

    @pytest.mark.asyncio
    async def test_reads_whole_body_within_limit(self) -> None:
        request = ChunkedRequest([b"abc", b"def", b""])

        assert await _read_body(request, 6) == b"abcdef"

    @pytest.mark.asyncio
    async def test_stops_once_limit_is_crossed(self) -> None:
        request = ChunkedRequest([b"x" * 8] * 100)

        body = await _read_body(request, 10)

        assert len(body) == 16
        assert request.consumed == 2

    @pytest.mark.asyncio
    async def test_no_limit_reads_everything(self) -> None:
        request = ChunkedRequest([b"x" * 8] * 4)

        assert len(await _read_body(request, None)) == 32
        assert request.consumed == 4
