"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CartItemSpec:
    """Input: one line of a bulk cart replacement."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    code: str
    title: str
    description: str
    price: str  # formatted, e.g. "$15.00"
    stock: int
    category: str
    status: bool
    thumbnails: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProductPageDTO:
    """Output: one page of a catalog query plus navigation."""

    items: list[ProductDTO]
    total_docs: int
    total_pages: int
    page: int
    limit: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: int | None
    next_page: int | None
    prev_link: str | None
    next_link: str | None


@dataclass(frozen=True)
class CartItemDTO:
    """Output: a cart line.

    ``product`` is the current product snapshot, or None when product
    details were not requested or the product has since been deleted.
    """

    product_id: str
    quantity: int
    product: ProductDTO | None = None


@dataclass(frozen=True)
class CartDTO:
    """Output: a complete cart as displayed to the user."""

    id: str
    items: list[CartItemDTO]
    total_quantity: int
    created_at: str
    updated_at: str
