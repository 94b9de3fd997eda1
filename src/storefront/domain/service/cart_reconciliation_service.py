"""Domain service: Cart reconciliation.

Coordinates the cross-aggregate rules for changing a cart's lines:
every referenced product must exist *now*, because products can be
deleted independently of the carts pointing at them.

Each operation is validate-then-mutate: the cart is loaded, every
precondition is checked, and only then is the aggregate changed and
saved.  A failed precondition leaves the stored cart untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CartReconciliationService:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def add_item(self, cart_id: str, product_id: str) -> Cart:
        """Add one unit of a product, merging into an existing line."""
        cart = self._load_cart(cart_id)
        self._require_product(product_id)

        item = cart.add_product(product_id)
        self._cart_repo.save(cart)
        logger.info(
            "Cart %s: added product %s (quantity now %s)",
            cart.id, product_id, item.quantity,
        )
        return cart

    def set_quantity(self, cart_id: str, product_id: str, quantity: int) -> Cart:
        """Overwrite a line's quantity. Zero or negative is rejected."""
        cart = self._load_cart(cart_id)
        Quantity(quantity)  # rejects < 1 before any lookup
        self._require_product(product_id)

        cart.set_quantity(product_id, quantity)
        self._cart_repo.save(cart)
        logger.info("Cart %s: product %s set to %d", cart.id, product_id, quantity)
        return cart

    def remove_item(self, cart_id: str, product_id: str) -> Cart:
        """Remove a product's line.

        The product itself need not exist any more, so dangling lines
        left behind by a product deletion can still be removed.
        """
        cart = self._load_cart(cart_id)

        cart.remove_product(product_id)
        self._cart_repo.save(cart)
        logger.info("Cart %s: removed product %s", cart.id, product_id)
        return cart

    def replace_all(
        self,
        cart_id: str,
        items: Iterable[tuple[str, int]],
    ) -> Cart:
        """Replace every line of the cart.

        Uses a two-phase approach:
          Phase 1: build and validate every line (shape, quantity,
                   product existence).  Fails before any mutation.
          Phase 2: replace the lines and persist.
        """
        cart = self._load_cart(cart_id)

        # Phase 1: validate
        try:
            entries = list(items)
        except TypeError as exc:
            raise ValidationError(
                "Items must be a list of (product_id, quantity) pairs"
            ) from exc

        new_items: list[CartItem] = []
        for position, entry in enumerate(entries):
            try:
                product_id, quantity = entry
            except (TypeError, ValueError) as exc:
                raise ValidationError(
                    f"Item #{position + 1} must be a (product_id, quantity) pair"
                ) from exc
            if not isinstance(product_id, str) or not product_id.strip():
                raise ValidationError(f"Item #{position + 1} is missing a product ID")
            new_items.append(CartItem(product_id.strip(), Quantity(quantity)))

        for item in new_items:
            self._require_product(item.product_id)

        # Phase 2: mutate and persist
        cart.replace_items(new_items)
        self._cart_repo.save(cart)
        logger.info("Cart %s: replaced with %d line(s)", cart.id, len(cart.items))
        return cart

    def clear(self, cart_id: str) -> Cart:
        """Empty the cart. Safe to repeat."""
        cart = self._load_cart(cart_id)

        cart.clear()
        self._cart_repo.save(cart)
        logger.info("Cart %s: cleared", cart.id)
        return cart

    # --- Internal helpers -----------------------------------------------------

    def _load_cart(self, cart_id: str) -> Cart:
        cart = self._cart_repo.get_by_id(cart_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart '{cart_id}' not found")
        return cart

    def _require_product(self, product_id: str) -> None:
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
