"""shopify-mcp CLI entrypoint."""

from __future__ import annotations

import click

from shopify_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="shopify-mcp")
def main() -> None:
    """shopify-mcp — Shopify store tools over the Model Context Protocol."""


# Register subcommands
from shopify_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
