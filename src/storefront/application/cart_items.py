"""Application services: cart line-item use cases.

Each handler delegates to ``CartReconciliationService`` and returns the
updated cart with every line's product populated, so callers never
need a second lookup.  Broadcasting the change to listeners is left to
the caller.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO, CartItemSpec
from storefront.application.mapping import cart_to_dto
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.cart_reconciliation_service import (
    CartReconciliationService,
)


class _CartItemsHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._product_repo = product_repo
        self._service = CartReconciliationService(cart_repo, product_repo)


class AddCartItemHandler(_CartItemsHandler):

    def handle(self, cart_id: str, product_id: str) -> CartDTO:
        cart = self._service.add_item(cart_id, product_id)
        return cart_to_dto(cart, self._product_repo)


class SetCartItemQuantityHandler(_CartItemsHandler):

    def handle(self, cart_id: str, product_id: str, quantity: int) -> CartDTO:
        cart = self._service.set_quantity(cart_id, product_id, quantity)
        return cart_to_dto(cart, self._product_repo)


class RemoveCartItemHandler(_CartItemsHandler):

    def handle(self, cart_id: str, product_id: str) -> CartDTO:
        cart = self._service.remove_item(cart_id, product_id)
        return cart_to_dto(cart, self._product_repo)


class ReplaceCartItemsHandler(_CartItemsHandler):

    def handle(self, cart_id: str, item_specs: list[CartItemSpec]) -> CartDTO:
        cart = self._service.replace_all(
            cart_id,
            [(spec.product_id, spec.quantity) for spec in item_specs],
        )
        return cart_to_dto(cart, self._product_repo)


class ClearCartHandler(_CartItemsHandler):

    def handle(self, cart_id: str) -> CartDTO:
        cart = self._service.clear(cart_id)
        return cart_to_dto(cart, self._product_repo)
