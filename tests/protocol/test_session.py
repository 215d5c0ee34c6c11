"""Tests for Session — the per-connection serve loop."""

import asyncio
import io
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from shopify_mcp.protocol.dispatcher import MethodDispatcher
from shopify_mcp.protocol.errors import FramingError
from shopify_mcp.protocol.session import Session
from shopify_mcp.protocol.transport import StdioTransport
from shopify_mcp.tools.catalog import build_registry


def _lines(*messages: Any) -> bytes:
    return b"".join(
        (m if isinstance(m, str) else json.dumps(m)).encode() + b"\n" for m in messages
    )


async def _serve(data: bytes, *, client: MagicMock | None = None, **kwargs: Any) -> list[dict[str, Any]]:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    output = io.BytesIO()
    transport = StdioTransport(reader, output)
    await transport.connect()

    if client is None:
        client = MagicMock()
        client.execute = AsyncMock(return_value={"data": {"productsCount": {"count": 1}}})
    session = Session(MethodDispatcher(build_registry(client)), transport, **kwargs)
    await session.serve()
    return [json.loads(line) for line in output.getvalue().decode().splitlines()]


class TestSession:
    async def test_responses_in_request_order(self) -> None:
        out = await _serve(_lines(
            {"jsonrpc": "2.0", "id": 1, "method": "initialize"},
            {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
            {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "count-entities"}},
        ))
        assert [r["id"] for r in out] == [1, 2, 3]
        assert all("result" in r for r in out)

    async def test_notifications_produce_no_output(self) -> None:
        out = await _serve(_lines(
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
            {"jsonrpc": "2.0", "method": "foo"},
        ))
        assert out == []

    async def test_document_split_across_lines(self) -> None:
        message = json.dumps({"jsonrpc": "2.0", "id": 8, "method": "tools/list"})
        whole = await _serve(_lines(message))
        pieces = [message[:5], message[5:19], message[19:]]
        split = await _serve(_lines(*pieces))
        assert split == whole

    async def test_blank_lines_ignored(self) -> None:
        out = await _serve(b"\n\n" + _lines({"id": 1, "method": "initialize"}) + b"\n")
        assert len(out) == 1

    async def test_serve_returns_at_eof(self) -> None:
        assert await _serve(b"") == []

    async def test_buffer_overflow_is_fatal(self) -> None:
        with pytest.raises(FramingError):
            await _serve(_lines("x" * 100), max_buffer_chars=10)

    async def test_feed_returns_response(self) -> None:
        client = MagicMock()
        transport = StdioTransport(asyncio.StreamReader(), io.BytesIO())
        await transport.connect()
        session = Session(MethodDispatcher(build_registry(client)), transport)

        assert await session.feed('{"jsonrpc": "2.0", "id": 1,') is None
        assert session.accumulator.pending
        response = await session.feed('"method": "initialize"}')
        assert response is not None and response.id == 1
        assert session.accumulator.pending == ""
