"""``shopify-mcp serve`` — run the MCP server over stdio."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from shopify_mcp.cli_commands._options import load_config, shopify_options
from shopify_mcp.cli_commands._output import error_console
from shopify_mcp.config import ConfigError

logger = logging.getLogger("shopify_mcp.serve")


@click.command()
@shopify_options
@click.option(
    "--request-timeout",
    type=float,
    default=None,
    help="Seconds a single request may run before it fails.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Diagnostic log level (logs go to stderr).",
)
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
def serve(
    config_path: Path | None,
    domain: str | None,
    token: str | None,
    api_version: str | None,
    timeout: float | None,
    request_timeout: float | None,
    log_level: str | None,
    telemetry: bool,
) -> None:
    """Serve Shopify tools over newline-delimited JSON-RPC on stdin/stdout.

    Exits 0 when stdin closes and 1 on any fatal error.
    """
    from shopify_mcp.protocol.errors import FramingError
    from shopify_mcp.server import run_server
    from shopify_mcp.utils.logging import configure_logging

    try:
        config = load_config(
            config_path,
            domain=domain,
            token=token,
            api_version=api_version,
            timeout=timeout,
            request_timeout=request_timeout,
            log_level=log_level,
        )
    except ConfigError as exc:
        error_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    configure_logging(config.log_level)

    if telemetry or (config.telemetry is not None and config.telemetry.enabled):
        from shopify_mcp.utils.telemetry import configure_telemetry

        otlp = config.telemetry.otlp_endpoint if config.telemetry else None
        try:
            configure_telemetry(otlp_endpoint=otlp)
        except ImportError as exc:
            error_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    try:
        asyncio.run(run_server(config))
    except FramingError as exc:
        logger.error("Fatal framing error: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception:
        logger.exception("Uncaught exception")
        sys.exit(1)
