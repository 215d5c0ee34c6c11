"""Tests for ToolRegistry."""

from typing import Any
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel

from shopify_mcp.protocol.errors import INVALID_PARAMS, METHOD_NOT_FOUND, InvalidParamsError, ToolNotFoundError
from shopify_mcp.protocol.models import ToolInvocation
from shopify_mcp.tools.base import ShopifyTool, Tool
from shopify_mcp.tools.catalog import build_registry, tool_descriptors
from shopify_mcp.tools.registry import ToolRegistry


class _EchoArguments(BaseModel):
    message: str


class _EchoTool(ShopifyTool):
    name = "echo"
    aliases = ("say",)
    description = "Echo a message"
    usage = "{ message: string }"
    arguments_model = _EchoArguments
    input_schema: dict[str, Any] = {
        "type": "object",
        "properties": {"message": {"type": "string"}},
        "required": ["message"],
    }

    async def run(self, arguments: _EchoArguments) -> str:
        return f"echo: {arguments.message}"


class _FailingTool(_EchoTool):
    name = "fail"
    aliases = ()

    async def run(self, arguments: _EchoArguments) -> str:
        raise RuntimeError("tool exploded")


class TestToolRegistry:
    def test_tool_satisfies_protocol(self) -> None:
        assert isinstance(_EchoTool(MagicMock()), Tool)

    def test_tool_without_run_cannot_be_built(self) -> None:
        class _Incomplete(ShopifyTool):
            name = "incomplete"
            description = "No run method."
            usage = "{}"
            arguments_model = _EchoArguments
            input_schema: dict[str, Any] = {"type": "object"}

        with pytest.raises(TypeError, match="abstract"):
            _Incomplete(MagicMock())

    def test_duplicate_names_rejected(self) -> None:
        client = MagicMock()
        with pytest.raises(ValueError, match="Duplicate"):
            ToolRegistry([_EchoTool(client), _EchoTool(client)])

    def test_descriptors_exclude_aliases(self) -> None:
        registry = ToolRegistry([_EchoTool(MagicMock())])
        assert [d.name for d in registry.descriptors()] == ["echo"]
        assert registry.names() == ["echo"]
        assert len(registry) == 1

    def test_resolve_alias(self) -> None:
        registry = ToolRegistry([_EchoTool(MagicMock())])
        assert registry.resolve("say") is registry.resolve("echo")

    def test_resolve_unknown(self) -> None:
        registry = ToolRegistry([_EchoTool(MagicMock())])
        with pytest.raises(ToolNotFoundError, match="frobnicate") as info:
            registry.resolve("frobnicate")
        assert info.value.code == METHOD_NOT_FOUND

    async def test_invoke_wraps_text(self) -> None:
        registry = ToolRegistry([_EchoTool(MagicMock())])
        result = await registry.invoke(ToolInvocation(name="echo", arguments={"message": "hi"}))
        assert result.to_wire() == {
            "content": [{"type": "text", "text": "echo: hi"}],
            "isError": False,
        }

    async def test_invoke_invalid_arguments(self) -> None:
        registry = ToolRegistry([_EchoTool(MagicMock())])
        with pytest.raises(InvalidParamsError) as info:
            await registry.invoke(ToolInvocation(name="echo", arguments={"message": 5}))
        assert info.value.code == INVALID_PARAMS
        assert "Expected { message: string }" in info.value.message
        assert info.value.data == [{"field": "message", "message": "Input should be a valid string"}]

    async def test_invoke_propagates_tool_failure(self) -> None:
        registry = ToolRegistry([_FailingTool(MagicMock())])
        with pytest.raises(RuntimeError, match="exploded"):
            await registry.invoke(ToolInvocation(name="fail", arguments={"message": "x"}))


class TestCatalog:
    def test_default_tools(self) -> None:
        registry = build_registry(MagicMock())
        assert registry.names() == [
            "count-entities",
            "delete-entity-by-name",
            "update-resource-address",
        ]

    def test_descriptors_without_client(self) -> None:
        assert [d.name for d in tool_descriptors()] == build_registry(MagicMock()).names()

    def test_delete_schema_requires_product_name(self) -> None:
        by_name = {d.name: d for d in tool_descriptors()}
        assert by_name["delete-entity-by-name"].input_schema["required"] == ["productName"]
        assert by_name["update-resource-address"].input_schema["required"] == ["updates"]
