"""Server-side transports and the response emitter.

A transport satisfies the :class:`LineTransport` protocol, providing
``connect``, ``read_line``, ``write``, and ``close`` methods.  Framing is one
JSON document per line in both directions.
"""

from __future__ import annotations

import asyncio
import json
import os
import stat
import sys
from typing import TYPE_CHECKING, BinaryIO, Protocol, runtime_checkable

from shopify_mcp.protocol.errors import FramingError

if TYPE_CHECKING:
    from shopify_mcp.protocol.models import JsonRpcResponse

DEFAULT_LINE_LIMIT = 4 * 1024 * 1024


@runtime_checkable
class LineTransport(Protocol):
    """Abstract line-oriented transport for JSON-RPC traffic."""

    async def connect(self) -> None: ...
    async def read_line(self) -> str | None: ...
    async def write(self, text: str) -> None: ...
    async def close(self) -> None: ...


class StdioTransport:
    """Reads lines from stdin and writes lines to stdout.

    A reader and an output stream may be injected (tests, embedding);
    otherwise ``connect`` binds the process's standard streams.  Pipes,
    sockets and terminals are read through an asyncio pipe; a regular file
    redirected onto stdin is read line by line in a worker thread.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader | None = None,
        output: BinaryIO | None = None,
        *,
        limit: int = DEFAULT_LINE_LIMIT,
    ) -> None:
        self._reader = reader
        self._input: BinaryIO | None = None
        self._output = output
        self._limit = limit

    async def connect(self) -> None:
        """Attach stdin (pipe reader or file) and select the output stream."""
        if self._reader is None and self._input is None:
            if _is_pipe_like(sys.stdin.fileno()):
                loop = asyncio.get_running_loop()
                reader = asyncio.StreamReader(limit=self._limit)
                await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
                self._reader = reader
            else:
                self._input = sys.stdin.buffer
        if self._output is None:
            self._output = sys.stdout.buffer

    async def read_line(self) -> str | None:
        """Return the next line without its terminator, or None at end of input."""
        if self._reader is not None:
            try:
                raw = await self._reader.readline()
            except ValueError as exc:
                raise FramingError(self._limit) from exc
        elif self._input is not None:
            raw = await asyncio.to_thread(self._input.readline, self._limit + 1)
            if len(raw) > self._limit and not raw.endswith(b"\n"):
                raise FramingError(self._limit)
        else:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        if not raw:
            return None
        return raw.decode("utf-8", errors="replace").rstrip("\r\n")

    async def write(self, text: str) -> None:
        """Write *text* to the output stream and flush it."""
        if self._output is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        self._output.write(text.encode("utf-8"))
        self._output.flush()

    async def close(self) -> None:
        """Flush pending output and drop the stream references."""
        if self._output is not None:
            self._output.flush()
        self._reader = None
        self._input = None
        self._output = None


def _is_pipe_like(fd: int) -> bool:
    mode = os.fstat(fd).st_mode
    return stat.S_ISFIFO(mode) or stat.S_ISSOCK(mode) or stat.S_ISCHR(mode)


class ResponseEmitter:
    """Serializes responses as single newline-terminated JSON lines."""

    def __init__(self, transport: LineTransport) -> None:
        self._transport = transport

    @staticmethod
    def encode(response: JsonRpcResponse) -> str:
        """Return the wire form of *response*: compact JSON plus ``\\n``."""
        return json.dumps(response.to_wire(), separators=(",", ":")) + "\n"

    async def emit(self, response: JsonRpcResponse) -> None:
        await self._transport.write(self.encode(response))
