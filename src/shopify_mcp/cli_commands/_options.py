"""Shared CLI options for commands that talk to a Shopify store."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from shopify_mcp.config import ConfigLoader, ServerConfig

F = TypeVar("F", bound=Callable[..., Any])

_SHOPIFY_OPTIONS = [
    click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="YAML config file.",
    ),
    click.option("--domain", envvar="SHOPIFY_DOMAIN", default=None, help="Store domain (env: SHOPIFY_DOMAIN)."),
    click.option("--token", envvar="SHOPIFY_TOKEN", default=None, help="Admin API access token (env: SHOPIFY_TOKEN)."),
    click.option(
        "--api-version",
        envvar="SHOPIFY_API_VERSION",
        default=None,
        help="Admin API version (env: SHOPIFY_API_VERSION).",
    ),
    click.option("--timeout", type=float, default=None, help="HTTP timeout for Shopify calls, in seconds."),
]


def shopify_options(func: F) -> F:
    """Attach the config/credential options to a command."""
    for option in reversed(_SHOPIFY_OPTIONS):
        func = option(func)
    return func


def load_config(
    config_path: Path | None,
    *,
    domain: str | None,
    token: str | None,
    api_version: str | None,
    timeout: float | None,
    **overrides: Any,
) -> ServerConfig:
    """Merge the YAML file (if any) with command-line values."""
    return ConfigLoader(config_path).load({
        "domain": domain,
        "access_token": token,
        "api_version": api_version,
        "timeout": timeout,
        **overrides,
    })
