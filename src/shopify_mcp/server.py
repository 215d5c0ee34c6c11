"""Server wiring — config in, running stdio session out."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shopify_mcp.protocol.dispatcher import MethodDispatcher
from shopify_mcp.protocol.session import Session
from shopify_mcp.protocol.transport import StdioTransport
from shopify_mcp.shopify.client import ShopifyClient
from shopify_mcp.tools.catalog import build_registry

if TYPE_CHECKING:
    from shopify_mcp.config import ServerConfig
    from shopify_mcp.protocol.transport import LineTransport
    from shopify_mcp.shopify.client import GraphQLExecutor

logger = logging.getLogger(__name__)


async def run_server(
    config: ServerConfig,
    *,
    transport: LineTransport | None = None,
    client: GraphQLExecutor | None = None,
) -> None:
    """Serve one session until its input closes.

    *transport* defaults to stdio and *client* to a :class:`ShopifyClient`
    built from ``config.shopify``.
    """
    transport = transport or StdioTransport()
    await transport.connect()
    try:
        if client is not None:
            await _serve(config, transport, client)
            return
        async with ShopifyClient(config.shopify) as shopify:
            logger.info("Using Shopify endpoint %s", shopify.url)
            await _serve(config, transport, shopify)
    finally:
        await transport.close()


async def _serve(config: ServerConfig, transport: LineTransport, client: GraphQLExecutor) -> None:
    dispatcher = MethodDispatcher(build_registry(client), request_timeout=config.request_timeout)
    session = Session(dispatcher, transport, max_buffer_chars=config.max_buffer_chars)
    await session.serve()
