"""Error types for the Shopify collaborator."""

from __future__ import annotations


class ShopifyError(Exception):
    """Base error for all Shopify-side failures."""


class RemoteServiceError(ShopifyError):
    """The GraphQL endpoint could not be reached or returned an unusable body."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        self.detail = detail
        self.status_code = status_code
        prefix = f"HTTP {status_code}: " if status_code is not None else ""
        super().__init__(f"{prefix}{detail}")
