"""Line accumulation — turns transport fragments into complete JSON documents.

Fragments are concatenated until the buffer parses as one JSON document.  An
incomplete document is not an error: the buffer is kept and the next fragment
is appended.  The accumulator only checks textual parseability; whether the
document is a well-formed JSON-RPC message is decided downstream.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from shopify_mcp.protocol.errors import FramingError

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 1_048_576


class LineAccumulator:
    """Buffers text fragments until they form a complete JSON document.

    Each session owns its own accumulator, so independent sessions never
    share partial input.

    Usage::

        acc = LineAccumulator()
        acc.feed('{"jsonrpc": "2.0",')   # -> None, still buffering
        acc.feed('"method": "ping"}')    # -> {"jsonrpc": "2.0", "method": "ping"}
    """

    def __init__(self, max_chars: int = DEFAULT_MAX_CHARS) -> None:
        self._max_chars = max_chars
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received so far that has not yet formed a document."""
        return self._buffer

    def reset(self) -> None:
        self._buffer = ""

    def feed(self, fragment: str) -> Any | None:
        """Append *fragment* and return the parsed document, if complete.

        Raises:
            FramingError: If the pending buffer grows past ``max_chars``.
                The buffer is cleared before raising.
        """
        if not fragment:
            return None

        self._buffer += fragment
        if len(self._buffer) > self._max_chars:
            self.reset()
            raise FramingError(self._max_chars)

        try:
            document = json.loads(self._buffer)
        except json.JSONDecodeError:
            logger.debug("Buffering incomplete JSON (%d chars pending)", len(self._buffer))
            return None

        self.reset()
        return document
