"""Server configuration — Shopify credentials, limits, logging, telemetry.

Configuration is assembled once at startup and passed explicitly into the
objects that need it; nothing reads credentials from module globals.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from shopify_mcp.protocol.framing import DEFAULT_MAX_CHARS

DEFAULT_API_VERSION = "2024-01"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Raised when configuration cannot be read or fails validation."""


class ShopifySettings(BaseModel):
    """Connection settings for the Shopify Admin GraphQL endpoint."""

    domain: str = Field(..., min_length=1, description="Store domain, e.g. 'my-shop.myshopify.com'.")
    access_token: str = Field(..., min_length=1, description="Admin API access token.")
    api_version: str = DEFAULT_API_VERSION
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds.")

    @field_validator("domain")
    @classmethod
    def _strip_scheme(cls, value: str) -> str:
        for scheme in ("https://", "http://"):
            if value.startswith(scheme):
                value = value[len(scheme) :]
        return value.rstrip("/")

    @property
    def graphql_url(self) -> str:
        return f"https://{self.domain}/admin/api/{self.api_version}/graphql.json"


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerConfig(BaseModel):
    """Top-level configuration for ``shopify-mcp serve``."""

    shopify: ShopifySettings
    request_timeout: float | None = Field(
        default=60.0,
        description="Seconds a single request may run before it fails; None disables the limit.",
    )
    max_buffer_chars: int = Field(default=DEFAULT_MAX_CHARS, gt=0)
    log_level: LogLevel = "INFO"
    telemetry: TelemetrySettings | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class ConfigLoader:
    """Build a :class:`ServerConfig` from an optional YAML file plus overrides."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    def load(self, overrides: dict[str, Any] | None = None) -> ServerConfig:
        """Read YAML (if any), apply non-None overrides, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  Override keys
        ``domain``, ``access_token``, ``api_version`` and ``timeout`` apply to
        the ``shopify`` section; every other key applies at the top level.

        Raises:
            ConfigError: On read errors, YAML parse errors, or validation failures.
        """
        data = self._read() if self._path is not None else {}

        shopify: dict[str, Any] = dict(data.get("shopify") or {})
        for key, value in (overrides or {}).items():
            if value is None:
                continue
            if key in ShopifySettings.model_fields:
                shopify[key] = value
            else:
                data[key] = value
        data["shopify"] = shopify

        try:
            return ServerConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc

    def _read(self) -> dict[str, Any]:
        assert self._path is not None
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")
        return data
