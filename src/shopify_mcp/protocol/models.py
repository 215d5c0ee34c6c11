"""Protocol models — JSON-RPC 2.0 messages, tool descriptors, and content blocks.

Implements the message format used by the Model Context Protocol for
tool discovery (``tools/list``) and execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator

JSONRPC_VERSION = "2.0"

RequestId = StrictInt | StrictFloat | StrictStr | None

# Positional params are legal JSON-RPC; handlers that need names reject them.
Params = dict[str, Any] | list[Any]

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class _Message(BaseModel):
    jsonrpc: str = JSONRPC_VERSION
    method: StrictStr
    params: Params = Field(default_factory=dict)

    @field_validator("params", mode="before")
    @classmethod
    def _null_params(cls, value: Any) -> Any:
        return {} if value is None else value


class JsonRpcRequest(_Message):
    """A JSON-RPC 2.0 request message (an ``id`` is present, possibly null)."""

    id: RequestId


class JsonRpcNotification(_Message):
    """A JSON-RPC 2.0 notification (no ``id``, never answered)."""


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set; use :meth:`success` and
    :meth:`failure` rather than the constructor.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(
        cls, request_id: int | float | str | None, result: dict[str, Any]
    ) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(
        cls,
        request_id: int | float | str | None,
        code: int,
        message: str,
        data: Any = None,
    ) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message, data=data))

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> dict[str, Any]:
        """Return the dict written to the wire.

        ``id`` is always present (null when the request id was unusable) and
        only one of ``result``/``error`` appears.
        """
        wire: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            wire["error"] = self.error.model_dump(exclude_none=True)
        else:
            wire["result"] = self.result if self.result is not None else {}
        return wire


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolInvocation(BaseModel):
    """The ``params`` of a ``tools/call`` request."""

    name: StrictStr
    arguments: dict[str, Any] = Field(default_factory=dict)

    @field_validator("arguments", mode="before")
    @classmethod
    def _null_arguments(cls, value: Any) -> Any:
        return {} if value is None else value


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """The uniform result of every tool: a list of content blocks."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = []
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_text(cls, text: str) -> ToolResult:
        """Create a ToolResult with a single text content block."""
        return cls(content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.content)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
