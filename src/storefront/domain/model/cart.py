"""Cart aggregate: an ordered list of product lines.

The Cart owns its line items and enforces their invariants:
- at most one line per product (adding again merges into that line)
- every line quantity is >= 1; a line is removed, never kept at zero

Whether a referenced product actually exists is a cross-aggregate
check, performed by ``CartReconciliationService`` before it calls in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Quantity


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartItem:
    product_id: str
    quantity: Quantity


@dataclass
class Cart:
    """Aggregate root for shopping carts.

    Use ``Cart.create()`` for new carts.  Mutating methods validate
    first and only then touch ``items``.
    """

    id: str | None
    items: list[CartItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @staticmethod
    def create() -> Cart:
        return Cart(id=None)

    # --- Line item operations -------------------------------------------------

    def add_product(self, product_id: str) -> CartItem:
        """Add one unit of a product, merging into an existing line."""
        item = self.find_item(product_id)
        if item is not None:
            item.quantity = item.quantity + Quantity(1)
        else:
            item = CartItem(product_id=product_id, quantity=Quantity(1))
            self.items.append(item)
        self._touch()
        return item

    def set_quantity(self, product_id: str, quantity: int) -> CartItem:
        """Overwrite a line's quantity.

        Zero is rejected rather than treated as a removal; callers
        wanting to drop a line use ``remove_product``.
        """
        new_quantity = Quantity(quantity)
        item = self._require_item(product_id)
        item.quantity = new_quantity
        self._touch()
        return item

    def remove_product(self, product_id: str) -> None:
        """Drop a product's line. Missing lines are an error, not a no-op."""
        item = self._require_item(product_id)
        self.items.remove(item)
        self._touch()

    def replace_items(self, items: list[CartItem]) -> None:
        """Replace the whole line list.

        Lines sharing a product id are merged by summing their
        quantities, keeping the position of the first occurrence.
        """
        merged: dict[str, CartItem] = {}
        for item in items:
            existing = merged.get(item.product_id)
            if existing is None:
                merged[item.product_id] = CartItem(item.product_id, item.quantity)
            else:
                existing.quantity = existing.quantity + item.quantity
        self.items = list(merged.values())
        self._touch()

    def clear(self) -> None:
        """Empty the cart. Clearing an empty cart is fine."""
        if self.items:
            self.items = []
            self._touch()

    # --- Queries --------------------------------------------------------------

    def find_item(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity.value for item in self.items)

    # --- Internal helpers -----------------------------------------------------

    def _require_item(self, product_id: str) -> CartItem:
        item = self.find_item(product_id)
        if item is None:
            raise EntityNotFoundError(
                f"Product '{product_id}' is not in cart '{self.id}'"
            )
        return item

    def _touch(self) -> None:
        self.updated_at = _now()
