"""The default tool set served by ``shopify-mcp``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shopify_mcp.tools.orders import UpdateOrderAddressTool
from shopify_mcp.tools.products import CountProductsTool, DeleteProductTool
from shopify_mcp.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from shopify_mcp.protocol.models import ToolDescriptor
    from shopify_mcp.shopify.client import GraphQLExecutor
    from shopify_mcp.tools.base import ShopifyTool

TOOL_TYPES: tuple[type[ShopifyTool], ...] = (
    CountProductsTool,
    DeleteProductTool,
    UpdateOrderAddressTool,
)


def build_registry(client: GraphQLExecutor) -> ToolRegistry:
    """Return a registry with every Shopify tool bound to *client*."""
    return ToolRegistry(tool_type(client) for tool_type in TOOL_TYPES)


def tool_descriptors() -> list[ToolDescriptor]:
    """Return the descriptors of the default tools without a client."""
    return [tool_type.descriptor() for tool_type in TOOL_TYPES]
