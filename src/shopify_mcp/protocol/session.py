"""Session — one client connection: its input buffer, dispatcher, and emitter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shopify_mcp.protocol.framing import DEFAULT_MAX_CHARS, LineAccumulator
from shopify_mcp.protocol.transport import ResponseEmitter

if TYPE_CHECKING:
    from shopify_mcp.protocol.dispatcher import MethodDispatcher
    from shopify_mcp.protocol.models import JsonRpcResponse
    from shopify_mcp.protocol.transport import LineTransport

logger = logging.getLogger(__name__)


class Session:
    """Serves JSON-RPC over a line transport until the input closes.

    Lines are handled strictly in arrival order: each request's response is
    written before the next line is read.

    Usage::

        transport = StdioTransport()
        await transport.connect()
        await Session(dispatcher, transport).serve()
    """

    def __init__(
        self,
        dispatcher: MethodDispatcher,
        transport: LineTransport,
        *,
        max_buffer_chars: int = DEFAULT_MAX_CHARS,
    ) -> None:
        self._dispatcher = dispatcher
        self._transport = transport
        self._emitter = ResponseEmitter(transport)
        self._accumulator = LineAccumulator(max_buffer_chars)

    @property
    def accumulator(self) -> LineAccumulator:
        return self._accumulator

    async def serve(self) -> None:
        """Read, dispatch, and answer lines until end of input.

        Raises:
            FramingError: If buffered input exceeds the configured cap.
        """
        logger.info("Started and ready")
        while True:
            line = await self._transport.read_line()
            if line is None:
                logger.info("Connection closed")
                return
            await self.feed(line)

    async def feed(self, fragment: str) -> JsonRpcResponse | None:
        """Process one input fragment; return the response it produced, if any."""
        document = self._accumulator.feed(fragment)
        # A bare ``null`` document is indistinguishable from "incomplete"; it
        # carries no id, so it would be dropped anyway.
        if document is None:
            return None

        response = await self._dispatcher.dispatch(document)
        if response is not None:
            await self._emitter.emit(response)
        return response
