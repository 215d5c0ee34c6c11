"""Tool invocation layer — argument validation and Shopify tool adapters."""

from shopify_mcp.tools.base import ShopifyTool, Tool
from shopify_mcp.tools.catalog import build_registry
from shopify_mcp.tools.orders import UpdateOrderAddressTool
from shopify_mcp.tools.products import CountProductsTool, DeleteProductTool
from shopify_mcp.tools.registry import ToolRegistry

__all__ = [
    "CountProductsTool",
    "DeleteProductTool",
    "ShopifyTool",
    "Tool",
    "ToolRegistry",
    "UpdateOrderAddressTool",
    "build_registry",
]
