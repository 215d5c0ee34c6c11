"""Shopify MCP — Model Context Protocol server for Shopify store operations."""

from __future__ import annotations

__version__ = "0.1.0"
