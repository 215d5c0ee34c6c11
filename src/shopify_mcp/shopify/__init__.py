"""Shopify Admin GraphQL collaborator."""

from shopify_mcp.shopify.client import GraphQLExecutor, ShopifyClient, graphql_errors
from shopify_mcp.shopify.errors import RemoteServiceError, ShopifyError

__all__ = [
    "GraphQLExecutor",
    "RemoteServiceError",
    "ShopifyClient",
    "ShopifyError",
    "graphql_errors",
]
