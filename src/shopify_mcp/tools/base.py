"""Tool protocol — the common interface for every tool exposed via ``tools/call``.

Every tool declares its argument model and a static descriptor so the
:class:`~shopify_mcp.tools.registry.ToolRegistry` can validate arguments and
list tools without knowing what the tool does.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

from shopify_mcp.protocol.models import ToolDescriptor

if TYPE_CHECKING:
    from pydantic import BaseModel

    from shopify_mcp.shopify.client import GraphQLExecutor


@runtime_checkable
class Tool(Protocol):
    """A named operation callable through ``tools/call``."""

    name: str
    description: str
    usage: str
    aliases: tuple[str, ...]
    arguments_model: type[BaseModel]

    def descriptor(self) -> ToolDescriptor:
        """Return the static metadata listed by ``tools/list``."""
        ...

    async def run(self, arguments: Any) -> str:
        """Execute the tool with validated *arguments* and return its text result."""
        ...


class ShopifyTool(ABC):
    """Shared plumbing for tools backed by the Shopify GraphQL API."""

    name: ClassVar[str]
    description: ClassVar[str]
    usage: ClassVar[str]
    aliases: ClassVar[tuple[str, ...]] = ()
    arguments_model: ClassVar[type[BaseModel]]
    input_schema: ClassVar[dict[str, Any]]

    def __init__(self, client: GraphQLExecutor) -> None:
        self._client = client

    @classmethod
    def descriptor(cls) -> ToolDescriptor:
        return ToolDescriptor(
            name=cls.name,
            description=cls.description,
            input_schema=cls.input_schema,
        )

    @abstractmethod
    async def run(self, arguments: Any) -> str:
        """Execute against the store and return the text result."""


def pretty_json(data: Any) -> str:
    """Serialize *data* as indented, human-readable JSON."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def first_node(payload: dict[str, Any], connection: str) -> dict[str, Any] | None:
    """Return ``data.<connection>.edges[0].node`` from a GraphQL payload, if any."""
    data = payload.get("data")
    if not isinstance(data, dict):
        return None
    conn = data.get(connection)
    if not isinstance(conn, dict):
        return None
    edges = conn.get("edges") or []
    if not edges or not isinstance(edges[0], dict):
        return None
    node = edges[0].get("node")
    return node if isinstance(node, dict) else None


def mutation_result(payload: dict[str, Any], field: str) -> dict[str, Any]:
    """Return ``data.<field>`` from a mutation payload, or an empty dict."""
    data = payload.get("data")
    if not isinstance(data, dict):
        return {}
    result = data.get(field)
    return result if isinstance(result, dict) else {}
