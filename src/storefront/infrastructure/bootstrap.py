"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def settings() -> Settings:
    return Settings.from_env()


def product_repository(config: Settings | None = None) -> JsonProductRepository:
    config = config or settings()
    return JsonProductRepository(config.data_dir / "products.json")


def cart_repository(config: Settings | None = None) -> JsonCartRepository:
    config = config or settings()
    return JsonCartRepository(config.data_dir / "carts.json")
