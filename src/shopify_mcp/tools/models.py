"""Argument models for each tool.

Arguments are validated at the ``tools/call`` boundary; a tool only ever
sees an instance of its own model.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictStr, model_validator


class CountProductsArguments(BaseModel):
    """``count-entities`` takes no arguments; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class DeleteProductArguments(BaseModel):
    """Arguments for ``delete-entity-by-name``.

    ``name`` and ``product`` are accepted as spellings of ``productName``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    product_name: StrictStr = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("productName", "name", "product", "product_name"),
        description="Exact product title to delete.",
    )


class AddressUpdates(BaseModel):
    """The ``updates`` object of ``update-resource-address``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    shipping_address: dict[str, Any] | None = Field(default=None, alias="shippingAddress")
    billing_address: dict[str, Any] | None = Field(default=None, alias="billingAddress")

    def as_input(self) -> dict[str, Any]:
        """Return the address fields for ``OrderInput``, omitting absent ones."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UpdateOrderAddressArguments(BaseModel):
    """Arguments for ``update-resource-address``.

    One of ``orderId`` (a GID) or ``orderName`` (e.g. ``#1001``) must be set,
    and ``updates`` must carry at least one address.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    order_id: StrictStr | None = Field(default=None, alias="orderId")
    order_name: StrictStr | None = Field(default=None, alias="orderName")
    updates: AddressUpdates

    @model_validator(mode="after")
    def _require_address_and_order(self) -> UpdateOrderAddressArguments:
        if self.updates.shipping_address is None and self.updates.billing_address is None:
            msg = "No address fields provided in updates. Provide shippingAddress and/or billingAddress."
            raise ValueError(msg)
        if not self.order_id and not self.order_name:
            msg = "Missing order identifier. Provide either orderId (GID) or orderName."
            raise ValueError(msg)
        return self
