"""Application service: Update Product use case."""

from __future__ import annotations

import logging
from typing import Any

from storefront.application.dto import ProductDTO
from storefront.application.mapping import product_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, changes: dict[str, Any]) -> ProductDTO:
        """Apply a partial update.

        Carts reference products by ID only, so they see the change on
        their next read.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        product.apply_changes(changes)
        self._product_repo.save(product)
        logger.info("Updated product %s: %s", product_id, ", ".join(sorted(changes)))
        return product_to_dto(product)
