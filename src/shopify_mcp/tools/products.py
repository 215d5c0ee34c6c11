"""Product tools — count products and delete a product by exact title."""

from __future__ import annotations

import logging
from typing import Any

from shopify_mcp.shopify import queries
from shopify_mcp.shopify.client import graphql_errors
from shopify_mcp.tools.base import ShopifyTool, first_node, mutation_result, pretty_json
from shopify_mcp.tools.models import CountProductsArguments, DeleteProductArguments

logger = logging.getLogger(__name__)


class CountProductsTool(ShopifyTool):
    """Relays the raw ``productsCount`` payload as text."""

    name = "count-entities"
    aliases = ("get-products-count",)
    description = "Retrieves total products count from the Shopify store"
    usage = "{}"
    arguments_model = CountProductsArguments
    input_schema: dict[str, Any] = {
        "type": "object",
        "properties": {},
        "required": [],
    }

    async def run(self, arguments: CountProductsArguments) -> str:
        payload = await self._client.execute(queries.PRODUCTS_COUNT)
        return pretty_json(payload)


class DeleteProductTool(ShopifyTool):
    """Finds the first product whose title matches and deletes it.

    The lookup and the delete are two separate calls; nothing is rolled back
    if the delete fails.  Remote-reported failures come back as text.
    """

    name = "delete-entity-by-name"
    aliases = ("delete-product-by-name",)
    description = (
        "Finds a product by exact title and deletes it. "
        "Expects arguments: { productName: string }"
    )
    usage = "{ productName: string }"
    arguments_model = DeleteProductArguments
    input_schema: dict[str, Any] = {
        "type": "object",
        "properties": {
            "productName": {
                "type": "string",
                "minLength": 1,
                "description": "Exact product title to delete",
            },
        },
        "required": ["productName"],
    }

    async def run(self, arguments: DeleteProductArguments) -> str:
        title = arguments.product_name

        found = await self._client.execute(
            queries.FIND_PRODUCT,
            {"query": queries.search_term("title", title)},
        )
        errors = graphql_errors(found)
        if errors:
            return f"Error searching for product: {pretty_json(errors)}"

        node = first_node(found, "products")
        if node is None:
            return f'No product found with title exactly matching "{title}".'

        product_id = node.get("id")
        product_title = node.get("title", title)
        logger.info("Found product ID: %s title: %s", product_id, product_title)

        deleted = await self._client.execute(queries.DELETE_PRODUCT, {"id": product_id})
        outcome = mutation_result(deleted, "productDelete")

        user_errors = outcome.get("userErrors") or []
        if user_errors:
            return (
                f'Failed to delete product "{product_title}" (ID: {product_id}). '
                f"Errors: {pretty_json(user_errors)}"
            )
        if outcome.get("deletedProductId"):
            return (
                "Product deleted successfully.\n"
                f"Title: {product_title}\n"
                f"Deleted ID: {outcome['deletedProductId']}"
            )
        return f"Delete response: {pretty_json(deleted)}"
