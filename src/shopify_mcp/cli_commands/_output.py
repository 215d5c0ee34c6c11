"""Shared CLI output formatters."""

from __future__ import annotations

import json
from collections.abc import Iterable

from rich.console import Console
from rich.table import Table

from shopify_mcp.protocol.models import ToolDescriptor  # noqa: TC001

console = Console()
error_console = Console(stderr=True)


def print_tools_table(descriptors: Iterable[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for descriptor in descriptors:
        required = descriptor.input_schema.get("required") or []
        table.add_row(
            descriptor.name,
            _truncate(descriptor.description),
            ", ".join(required) or "-",
        )

    console.print(table)


def print_tools_json(descriptors: Iterable[ToolDescriptor]) -> None:
    """Print tool descriptors exactly as ``tools/list`` returns them."""
    console.print_json(json.dumps({"tools": [d.to_wire() for d in descriptors]}))


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
