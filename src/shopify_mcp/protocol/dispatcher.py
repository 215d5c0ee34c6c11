"""MethodDispatcher — classifies JSON-RPC documents and routes requests.

Requests get exactly one response; notifications never get one.  Every
failure below this layer is converted into an error response here.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from shopify_mcp import __version__
from shopify_mcp.protocol.errors import (
    INTERNAL_ERROR,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
)
from shopify_mcp.protocol.models import (
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    Params,
    ToolInvocation,
)
from shopify_mcp.utils.telemetry import ATTR_OUTCOME, ATTR_RPC_ID, ATTR_RPC_METHOD, get_tracer

if TYPE_CHECKING:
    from shopify_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "shopify-mcp"

Handler = Callable[[Params], Awaitable[dict[str, Any]]]


def classify(document: Any) -> JsonRpcRequest | JsonRpcNotification:
    """Turn a parsed JSON document into a request or a notification.

    A document with an ``id`` key (even ``null``) is a request; without one
    it is a notification.

    Raises:
        InvalidRequestError: If the document is not a JSON-RPC message.  The
            error carries the request id when it is usable.
    """
    if not isinstance(document, dict):
        msg = "Invalid Request: expected a JSON object"
        raise InvalidRequestError(msg)

    model: type[JsonRpcRequest | JsonRpcNotification]
    model = JsonRpcRequest if "id" in document else JsonRpcNotification
    try:
        return model.model_validate(document)
    except ValidationError as exc:
        request_id = document.get("id")
        usable = request_id if _is_valid_id(request_id) else None
        fields = ", ".join(".".join(str(p) for p in e["loc"]) for e in exc.errors(include_url=False))
        raise InvalidRequestError(f"Invalid Request: bad or missing {fields}", request_id=usable) from exc


def _is_valid_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (int, float, str))


class MethodDispatcher:
    """Maps method names to handlers and builds the matching response.

    Usage::

        dispatcher = MethodDispatcher(build_registry(client))
        response = await dispatcher.dispatch({"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        server_name: str = SERVER_NAME,
        server_version: str = __version__,
        request_timeout: float | None = 60.0,
    ) -> None:
        self._registry = registry
        self._server_name = server_name
        self._server_version = server_version
        self._request_timeout = request_timeout
        self._initialized = False
        self._handlers: dict[str, Handler] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }
        self._notification_handlers: dict[str, Callable[[Params], None]] = {
            "notifications/initialized": self._on_initialized,
        }

    @property
    def initialized(self) -> bool:
        """Whether the client has sent ``notifications/initialized``."""
        return self._initialized

    @property
    def methods(self) -> list[str]:
        return list(self._handlers)

    async def dispatch(self, document: Any) -> JsonRpcResponse | None:
        """Handle one parsed document; return its response, or None for notifications."""
        try:
            message = classify(document)
        except InvalidRequestError as exc:
            if isinstance(document, dict) and "id" in document:
                logger.warning("Rejecting malformed request: %s", exc.message)
                return JsonRpcResponse.failure(exc.request_id, exc.code, exc.message)
            logger.warning("Dropping malformed message without id: %s", exc.message)
            return None

        if isinstance(message, JsonRpcNotification):
            self._notify(message)
            return None
        return await self._respond(message)

    def _notify(self, notification: JsonRpcNotification) -> None:
        logger.info("Processing notification: %s", notification.method)
        handler = self._notification_handlers.get(notification.method)
        if handler is None:
            return
        try:
            handler(notification.params)
        except Exception:
            logger.exception("Notification handler failed: %s", notification.method)

    async def _respond(self, request: JsonRpcRequest) -> JsonRpcResponse:
        logger.info("Received: %s", request.method)
        with _tracer.start_as_current_span("jsonrpc.request") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            if request.id is not None:
                span.set_attribute(ATTR_RPC_ID, str(request.id))

            try:
                handler = self._handlers.get(request.method)
                if handler is None:
                    raise MethodNotFoundError(request.method)
                result = await self._run(handler, request.params)
            except ProtocolError as exc:
                logger.warning("Request %r (%s) failed: %s", request.id, request.method, exc.message)
                response = JsonRpcResponse.failure(request.id, exc.code, exc.message, exc.data)
            except Exception as exc:
                logger.exception("Error processing request %r (%s)", request.id, request.method)
                response = JsonRpcResponse.failure(request.id, INTERNAL_ERROR, f"Internal error: {exc}")
            else:
                response = JsonRpcResponse.success(request.id, result)

            span.set_attribute(ATTR_OUTCOME, "error" if response.is_error else "ok")

        logger.debug("Sending response for: %s", request.method)
        return response

    async def _run(self, handler: Handler, params: Params) -> dict[str, Any]:
        if self._request_timeout is None:
            return await handler(params)
        try:
            return await asyncio.wait_for(handler(params), timeout=self._request_timeout)
        except TimeoutError as exc:
            msg = f"Request timed out after {self._request_timeout}s"
            raise InternalError(msg) from exc

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _initialize(self, params: Params) -> dict[str, Any]:
        if not isinstance(params, dict):
            params = {}
        client = params.get("clientInfo")
        if not isinstance(client, dict):
            client = {}
        logger.info(
            "Initialize from %s %s (protocol %s)",
            client.get("name", "unknown client"),
            client.get("version", ""),
            params.get("protocolVersion", "unspecified"),
        )
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self._server_name, "version": self._server_version},
        }

    async def _list_tools(self, params: Params) -> dict[str, Any]:
        return {"tools": [descriptor.to_wire() for descriptor in self._registry.descriptors()]}

    async def _call_tool(self, params: Params) -> dict[str, Any]:
        try:
            invocation = ToolInvocation.model_validate(params)
        except ValidationError as exc:
            msg = "Invalid params. Expected { name: string, arguments?: object }"
            raise InvalidParamsError(msg) from exc

        logger.info("Tool call: %s", invocation.name)
        logger.debug("Tool call %s arguments: %s", invocation.name, invocation.arguments)
        result = await self._registry.invoke(invocation)
        return result.to_wire()

    def _on_initialized(self, params: Params) -> None:
        self._initialized = True
        logger.info("Client initialized")
