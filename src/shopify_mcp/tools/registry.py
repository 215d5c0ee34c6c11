"""ToolRegistry — routes ``tools/call`` invocations to the correct tool."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from shopify_mcp.protocol.errors import InvalidParamsError, ToolNotFoundError
from shopify_mcp.protocol.models import ToolDescriptor, ToolResult
from shopify_mcp.utils.telemetry import ATTR_OUTCOME, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pydantic import BaseModel

    from shopify_mcp.protocol.models import ToolInvocation
    from shopify_mcp.tools.base import Tool

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)


class ToolRegistry:
    """Maintains a name-to-tool map, validates arguments, and runs tools.

    Usage::

        registry = ToolRegistry([CountProductsTool(client), DeleteProductTool(client)])

        registry.descriptors()                   # static list for tools/list
        result = await registry.invoke(call)     # validated, wrapped as text
    """

    def __init__(self, tools: Iterable[Tool]) -> None:
        self._tools: dict[str, Tool] = {}
        self._aliases: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in self._tools:
                msg = f"Duplicate tool name: {tool.name}"
                raise ValueError(msg)
            self._tools[tool.name] = tool
            for alias in tool.aliases:
                self._aliases[alias] = tool
        self._descriptors = tuple(tool.descriptor() for tool in self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> list[str]:
        """Return the canonical tool names in registration order."""
        return list(self._tools)

    def descriptors(self) -> tuple[ToolDescriptor, ...]:
        """Return the descriptors of all tools (aliases are never listed)."""
        return self._descriptors

    def resolve(self, name: str) -> Tool:
        """Look up a tool by canonical name or legacy alias."""
        tool = self._tools.get(name) or self._aliases.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    def parse_arguments(self, tool: Tool, arguments: dict[str, Any]) -> BaseModel:
        """Validate *arguments* against the tool's argument model."""
        try:
            return tool.arguments_model.model_validate(arguments)
        except ValidationError as exc:
            details = _describe(exc)
            raise InvalidParamsError(
                f"Invalid arguments for {tool.name}. Expected {tool.usage}: {details}",
                data=_error_details(exc),
            ) from exc

    async def invoke(self, invocation: ToolInvocation) -> ToolResult:
        """Resolve, validate, and run a tool; wrap its text as a content block."""
        tool = self.resolve(invocation.name)
        arguments = self.parse_arguments(tool, invocation.arguments)

        with _tracer.start_as_current_span("tool.invoke") as span:
            span.set_attribute(ATTR_TOOL_NAME, tool.name)
            try:
                text = await tool.run(arguments)
            except Exception:
                span.set_attribute(ATTR_OUTCOME, "error")
                raise
            span.set_attribute(ATTR_OUTCOME, "ok")

        logger.debug("Tool %s result: %s", tool.name, text)
        return ToolResult.from_text(text)


def _describe(exc: ValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors(include_url=False):
        loc = ".".join(str(p) for p in error["loc"])
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts)


def _error_details(exc: ValidationError) -> list[dict[str, str]]:
    return [
        {"field": ".".join(str(p) for p in error["loc"]), "message": error["msg"]}
        for error in exc.errors(include_url=False)
    ]
