"""``shopify-mcp tools`` — list tools and run one against a store."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click

from shopify_mcp.cli_commands._options import load_config, shopify_options
from shopify_mcp.cli_commands._output import console, print_tools_json, print_tools_table
from shopify_mcp.config import ConfigError


@click.group()
def tools() -> None:
    """List and run Shopify tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
def list_tools(as_json: bool) -> None:
    """List the tools exposed by the server."""
    from shopify_mcp.tools.catalog import tool_descriptors

    descriptors = tool_descriptors()
    if as_json:
        print_tools_json(descriptors)
    else:
        print_tools_table(descriptors)


@tools.command("call")
@click.argument("name")
@click.option("--args", "raw_args", default="{}", help="Tool arguments as a JSON object.")
@shopify_options
def call(
    name: str,
    raw_args: str,
    config_path: Path | None,
    domain: str | None,
    token: str | None,
    api_version: str | None,
    timeout: float | None,
) -> None:
    """Run tool NAME once against the configured store and print its result."""
    from shopify_mcp.protocol.errors import ProtocolError
    from shopify_mcp.protocol.models import ToolInvocation, ToolResult
    from shopify_mcp.shopify.client import ShopifyClient
    from shopify_mcp.tools.catalog import build_registry

    try:
        arguments: Any = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid --args JSON:[/red] {exc}")
        sys.exit(1)
    if not isinstance(arguments, dict):
        console.print("[red]Invalid --args JSON:[/red] expected an object")
        sys.exit(1)

    try:
        config = load_config(
            config_path, domain=domain, token=token, api_version=api_version, timeout=timeout
        )
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    async def _call() -> ToolResult:
        async with ShopifyClient(config.shopify) as client:
            registry = build_registry(client)
            return await registry.invoke(ToolInvocation(name=name, arguments=arguments))

    try:
        result = asyncio.run(_call())
    except ProtocolError as exc:
        console.print(f"[red]Error {exc.code}:[/red] {exc.message}")
        sys.exit(1)
    except Exception as exc:
        console.print(f"[red]Tool error:[/red] {exc}")
        sys.exit(1)

    console.print(result.text, markup=False, highlight=False)
