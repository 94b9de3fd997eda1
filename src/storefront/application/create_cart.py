"""Application service: Create Cart use case."""

from __future__ import annotations

import logging

from storefront.application.dto import CartDTO
from storefront.application.mapping import cart_to_dto
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CreateCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self) -> CartDTO:
        """Create a new, empty cart."""
        cart = Cart.create()
        self._cart_repo.save(cart)
        logger.info("Created cart %s", cart.id)
        return cart_to_dto(cart, self._product_repo)
