"""Shared error types for the protocol layer.

Every :class:`ProtocolError` carries the JSON-RPC error code it is reported
with.  The numeric codes are part of the wire contract and never change.
"""

from __future__ import annotations

from typing import Any

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)

    def to_error(self) -> dict[str, Any]:
        """Build the JSON-RPC ``error`` object for this failure."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


class InvalidRequestError(ProtocolError):
    """The document is valid JSON but not a JSON-RPC message."""

    code = INVALID_REQUEST

    def __init__(self, message: str, request_id: int | float | str | None = None) -> None:
        self.request_id = request_id
        super().__init__(message)


class MethodNotFoundError(ProtocolError):
    """No handler is registered for the requested method."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class ToolNotFoundError(MethodNotFoundError):
    """``tools/call`` named a tool that does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        ProtocolError.__init__(self, f"Unknown tool: {name}")
        self.method = "tools/call"


class InvalidParamsError(ProtocolError):
    """Request parameters or tool arguments failed validation."""

    code = INVALID_PARAMS


class InternalError(ProtocolError):
    """A handler failed in a way the client cannot correct."""

    code = INTERNAL_ERROR


class FramingError(ProtocolError):
    """The input buffer grew past its cap without yielding a document."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Pending input exceeded {limit} characters without a complete JSON document")
