"""Order tools — update an order's shipping and/or billing address."""

from __future__ import annotations

import logging
from typing import Any

from shopify_mcp.protocol.errors import InternalError
from shopify_mcp.shopify import queries
from shopify_mcp.shopify.client import graphql_errors
from shopify_mcp.shopify.errors import RemoteServiceError
from shopify_mcp.tools.base import ShopifyTool, first_node, mutation_result, pretty_json
from shopify_mcp.tools.models import UpdateOrderAddressArguments

logger = logging.getLogger(__name__)


class UpdateOrderAddressTool(ShopifyTool):
    """Runs ``orderUpdate`` with the supplied addresses.

    When only ``orderName`` is given the order is looked up first.  A lookup
    that finds nothing is reported as text; a lookup the remote side rejects
    fails the request with an internal error.
    """

    name = "update-resource-address"
    aliases = ("update-order-address",)
    description = (
        "Update an order's shipping and/or billing address. Accepts "
        "{ orderId?: string (GID), orderName?: string (e.g. '#1001'), "
        "updates: { shippingAddress?: {...}, billingAddress?: {...} } }"
    )
    usage = (
        "{ updates: { shippingAddress?: {...}, billingAddress?: {...} }, "
        "orderId?: string, orderName?: string }"
    )
    arguments_model = UpdateOrderAddressArguments
    input_schema: dict[str, Any] = {
        "type": "object",
        "properties": {
            "orderId": {"type": "string"},
            "orderName": {"type": "string"},
            "updates": {
                "type": "object",
                "properties": {
                    "shippingAddress": {"type": "object"},
                    "billingAddress": {"type": "object"},
                },
            },
        },
        "required": ["updates"],
    }

    async def run(self, arguments: UpdateOrderAddressArguments) -> str:
        order_id = arguments.order_id
        if not order_id:
            assert arguments.order_name
            order_id = await self._find_order_id(arguments.order_name)
            if order_id is None:
                return f'No order found with name exactly matching "{arguments.order_name}".'

        order_input: dict[str, Any] = {"id": order_id, **arguments.updates.as_input()}
        payload = await self._client.execute(queries.UPDATE_ORDER, {"input": order_input})
        outcome = mutation_result(payload, "orderUpdate")

        user_errors = outcome.get("userErrors") or []
        order = outcome.get("order")
        if user_errors:
            return f"Failed to update order {order_id}. Errors: {pretty_json(user_errors)}"
        if order:
            return (
                "Order updated successfully.\n"
                f"Order: {order.get('name') or order.get('id')}\n"
                f"Updated shippingAddress: {pretty_json(order.get('shippingAddress'))}\n"
                f"Updated billingAddress: {pretty_json(order.get('billingAddress'))}"
            )
        return f"orderUpdate response: {pretty_json(payload)}"

    async def _find_order_id(self, order_name: str) -> str | None:
        """Resolve a human-readable order name (e.g. ``#1001``) to its GID."""
        try:
            payload = await self._client.execute(
                queries.FIND_ORDER,
                {"query": queries.search_term("name", order_name)},
            )
        except RemoteServiceError as exc:
            raise InternalError(f"Error searching for order: {exc}") from exc

        errors = graphql_errors(payload)
        if errors:
            raise InternalError(
                f"Error searching for order: {pretty_json(errors)}",
                data=errors,
            )

        node = first_node(payload, "orders")
        if node is None:
            return None
        logger.info("Resolved order %s to %s", order_name, node.get("id"))
        return node.get("id")
