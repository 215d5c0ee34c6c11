"""End-to-end: newline-delimited JSON-RPC through run_server with a fake store."""

from __future__ import annotations

import asyncio
import io
import json
import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from shopify_mcp.config import ServerConfig, ShopifySettings
from shopify_mcp.protocol.errors import FramingError
from shopify_mcp.protocol.transport import StdioTransport
from shopify_mcp.server import run_server
from shopify_mcp.shopify.errors import RemoteServiceError


def _config(**kwargs: Any) -> ServerConfig:
    settings = ShopifySettings(domain="e2e-shop.myshopify.com", access_token="shpat_e2e")
    return ServerConfig(shopify=settings, **kwargs)


def _make_client(*responses: Any) -> MagicMock:
    client = MagicMock()
    client.execute = AsyncMock(side_effect=list(responses))
    return client


async def _serve(lines: list[str], client: MagicMock, **config: Any) -> list[dict[str, Any]]:
    reader = asyncio.StreamReader()
    for line in lines:
        reader.feed_data((line + "\n").encode("utf-8"))
    reader.feed_eof()
    output = io.BytesIO()

    await run_server(_config(**config), transport=StdioTransport(reader, output), client=client)

    return [json.loads(line) for line in output.getvalue().decode("utf-8").splitlines()]


def _request(request_id: Any, method: str, params: dict[str, Any] | None = None) -> str:
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return json.dumps(message)


class TestStdioSession:
    async def test_handshake_and_listing(self) -> None:
        responses = await _serve(
            [
                _request(1, "initialize", {"protocolVersion": "2024-11-05", "clientInfo": {"name": "e2e"}}),
                json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
                _request(2, "tools/list"),
            ],
            _make_client(),
        )

        assert [r["id"] for r in responses] == [1, 2]
        assert responses[0]["result"]["serverInfo"]["name"] == "shopify-mcp"
        names = [tool["name"] for tool in responses[1]["result"]["tools"]]
        assert names == ["count-entities", "delete-entity-by-name", "update-resource-address"]

    async def test_fragmented_document_matches_whole(self) -> None:
        whole = _request(7, "tools/list")
        split = [whole[:10], whole[10:25], whole[25:]]

        assert await _serve(split, _make_client()) == await _serve([whole], _make_client())

    async def test_notifications_are_silent(self) -> None:
        responses = await _serve(
            [
                json.dumps({"jsonrpc": "2.0", "method": "foo"}),
                json.dumps({"jsonrpc": "2.0", "method": "notifications/cancelled", "params": {"requestId": 1}}),
            ],
            _make_client(),
        )

        assert responses == []

    async def test_unknown_method_with_id(self) -> None:
        responses = await _serve([_request("abc", "foo")], _make_client())

        assert responses == [
            {"jsonrpc": "2.0", "id": "abc", "error": {"code": -32601, "message": "Method not found: foo"}}
        ]

    async def test_tool_scenarios(self) -> None:
        client = _make_client(
            {"data": {"products": {"edges": []}}},
            {"data": {"productsCount": {"count": 3}}},
        )
        responses = await _serve(
            [
                _request(1, "tools/call", {"name": "delete-entity-by-name", "arguments": {"productName": "Widget"}}),
                _request(2, "tools/call", {"name": "update-resource-address", "arguments": {"updates": {}}}),
                _request(3, "tools/call", {"name": "frobnicate", "arguments": {}}),
                _request(4, "tools/call", {"name": "get-products-count"}),
            ],
            client,
        )

        by_id = {r["id"]: r for r in responses}
        assert "No product found" in by_id[1]["result"]["content"][0]["text"]
        assert by_id[2]["error"]["code"] == -32602
        assert by_id[3]["error"]["code"] == -32601
        assert '"count": 3' in by_id[4]["result"]["content"][0]["text"]

    async def test_remote_failure_keeps_serving(self) -> None:
        client = _make_client(
            RemoteServiceError("connection refused"),
            {"data": {"productsCount": {"count": 1}}},
        )
        responses = await _serve(
            [
                _request(1, "tools/call", {"name": "count-entities"}),
                _request(2, "tools/call", {"name": "count-entities"}),
            ],
            client,
        )

        assert responses[0]["error"]["code"] == -32603
        assert "connection refused" in responses[0]["error"]["message"]
        assert "result" in responses[1]

    async def test_garbage_between_requests(self) -> None:
        responses = await _serve(
            ["[1, 2]", '"just a string"', _request(9, "tools/list")],
            _make_client(),
        )

        assert [r["id"] for r in responses] == [9]

    async def test_buffer_overflow_is_fatal(self) -> None:
        with pytest.raises(FramingError):
            await _serve(['{"jsonrpc": "2.0", "id": 1, "method": "' + "x" * 200], _make_client(), max_buffer_chars=64)

    async def test_stdin_redirected_from_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        requests = tmp_path / "requests.jsonl"
        requests.write_text(_request(1, "tools/list") + "\n" + _request(2.5, "initialize") + "\n")
        output = io.BytesIO()

        with requests.open() as stdin:
            monkeypatch.setattr(sys, "stdin", stdin)
            await run_server(_config(), transport=StdioTransport(output=output), client=_make_client())

        responses = [json.loads(line) for line in output.getvalue().decode("utf-8").splitlines()]
        assert [r["id"] for r in responses] == [1, 2.5]
        assert len(responses[0]["result"]["tools"]) == 3
