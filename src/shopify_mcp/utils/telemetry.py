"""Tracing for requests and tool calls.

Modules take a tracer once at import time::

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("tool.invoke") as span:
        span.set_attribute(ATTR_TOOL_NAME, "count-entities")

Until :func:`configure_telemetry` installs an SDK provider these spans are
no-ops, so the server runs with only ``opentelemetry-api`` installed.  The
SDK and the OTLP exporter come with ``pip install shopify-mcp[otel]``.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

ATTR_RPC_METHOD = "rpc.method"
ATTR_RPC_ID = "rpc.id"
ATTR_TOOL_NAME = "shopify_mcp.tool.name"
ATTR_OUTCOME = "shopify_mcp.outcome"

_INSTRUMENTATION_NAME = "shopify_mcp"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return the tracer for *name* (a no-op until telemetry is configured)."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "shopify-mcp",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install a global tracer provider.

    Console spans go to stderr; stdout belongs to the JSON-RPC stream.  When
    *otlp_endpoint* is set, spans are also batched to that collector.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP, the exporter
            package) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for tracing; install shopify-mcp[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    for processor in _span_processors(export_to_console, otlp_endpoint):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _span_processors(to_console: bool, otlp_endpoint: str | None) -> list[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if to_console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = "opentelemetry-exporter-otlp is required for OTLP export; install shopify-mcp[otel]"
            raise ImportError(msg) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors
