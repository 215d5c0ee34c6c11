"""ShopifyClient — async GraphQL calls against the Shopify Admin API.

The tools only depend on the :class:`GraphQLExecutor` protocol: an async
``(query, variables) -> dict`` function that either returns the decoded
response body or raises :class:`RemoteServiceError`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from shopify_mcp.shopify.errors import RemoteServiceError

if TYPE_CHECKING:
    from shopify_mcp.config import ShopifySettings

logger = logging.getLogger(__name__)


@runtime_checkable
class GraphQLExecutor(Protocol):
    """Executes a GraphQL document and returns the decoded JSON body."""

    async def execute(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]: ...


class ShopifyClient:
    """Async context manager owning an :class:`httpx.AsyncClient`.

    Satisfies the :class:`GraphQLExecutor` protocol.

    Usage::

        settings = ShopifySettings(domain="my-shop.myshopify.com", access_token="shpat_...")
        async with ShopifyClient(settings) as client:
            payload = await client.execute(queries.PRODUCTS_COUNT)
    """

    def __init__(
        self,
        settings: ShopifySettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ShopifyClient:
        await self.connect()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    @property
    def url(self) -> str:
        return self._settings.graphql_url

    async def connect(self) -> None:
        """Open the underlying HTTP connection pool."""
        if self._http is not None:
            return
        self._http = httpx.AsyncClient(
            headers={
                "X-Shopify-Access-Token": self._settings.access_token,
                "Content-Type": "application/json",
            },
            timeout=self._settings.timeout,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the HTTP connection pool."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def execute(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """POST a GraphQL document and return the decoded JSON object.

        HTTP error statuses whose body is a JSON object are returned as-is;
        Shopify reports the detail under the ``errors`` key.

        Raises:
            RemoteServiceError: On network failures, timeouts, or a body that
                is not a JSON object.
        """
        if self._http is None:
            msg = "Client not connected"
            raise RuntimeError(msg)

        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = await self._http.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise RemoteServiceError(str(exc) or type(exc).__name__) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteServiceError(
                "response body is not valid JSON", status_code=response.status_code
            ) from exc

        if not isinstance(data, dict):
            raise RemoteServiceError(
                "response body is not a JSON object", status_code=response.status_code
            )

        logger.debug("GraphQL response (HTTP %d): %s", response.status_code, data)
        return data


def graphql_errors(payload: dict[str, Any]) -> list[Any]:
    """Return the top-level GraphQL ``errors`` of *payload* as a list."""
    errors = payload.get("errors")
    if not errors:
        return []
    if isinstance(errors, list):
        return errors
    return [errors]
