"""Protocol layer — JSON-RPC framing, classification, dispatch, and transport."""

from shopify_mcp.protocol.dispatcher import MethodDispatcher, classify
from shopify_mcp.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    FramingError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
    ToolNotFoundError,
)
from shopify_mcp.protocol.framing import LineAccumulator
from shopify_mcp.protocol.session import Session
from shopify_mcp.protocol.transport import LineTransport, ResponseEmitter, StdioTransport

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "FramingError",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "LineAccumulator",
    "LineTransport",
    "MethodDispatcher",
    "MethodNotFoundError",
    "ProtocolError",
    "ResponseEmitter",
    "Session",
    "StdioTransport",
    "ToolNotFoundError",
    "classify",
]
