"""Application service: Delete Product use case.

Deleting a product does not touch carts.  Lines that still reference
it populate as ``product=None`` and can be removed individually.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        if not self._product_repo.delete(product_id):
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        logger.info("Deleted product %s", product_id)
