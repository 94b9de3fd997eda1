"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO
from storefront.application.mapping import product_to_dto
from storefront.domain.exceptions import ConflictError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        code: str,
        title: str,
        description: str,
        price: str | int | float,
        stock: int,
        category: str,
        status: bool = True,
        thumbnails: list[str] | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog.

        The product ``code`` is the business key and must be unique.
        """
        product = Product.create(
            code=code,
            title=title,
            description=description,
            price=Money.of(price),
            stock=stock,
            category=category,
            status=status,
            thumbnails=thumbnails,
        )

        if self._product_repo.get_by_code(product.code) is not None:
            raise ConflictError(f"A product with code '{product.code}' already exists")

        self._product_repo.save(product)
        logger.info("Added product %s (code=%s)", product.id, product.code)
        return product_to_dto(product)
