"""Domain service: Catalog query.

Filters, sorts and paginates a snapshot of the catalog.  Filtering and
counting share one predicate, so ``total_docs`` always describes the
same set the returned page was sliced from.

The engine is a pure function over the products it is handed; link
construction (which needs a base URL) is left to the application layer
via ``ProductQuery.link_params``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants for paging rules
# ---------------------------------------------------------------------------
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

TRUTHY_FLAGS = frozenset({"true", "1", "on"})


class PriceSort(Enum):
    ASC = "asc"
    DESC = "desc"

    @staticmethod
    def parse(raw: str | None) -> PriceSort | None:
        """Map a raw sort value to a PriceSort; unknown values mean no sort."""
        if raw is None:
            return None
        try:
            return PriceSort(raw.strip().lower())
        except ValueError:
            logger.debug("Ignoring unrecognised sort value %r", raw)
            return None


def parse_flag(raw: str | None) -> bool | None:
    """Parse the truthy-string convention used by query parameters.

    ``"true"``, ``"1"`` and ``"on"`` are True; any other string is False;
    None means the filter was not given.
    """
    if raw is None:
        return None
    return raw.strip().lower() in TRUTHY_FLAGS


@dataclass(frozen=True)
class ProductQuery:
    """Filter, sort and paging parameters for a catalog query.

    ``limit`` and ``page`` must already be coerced to integers; values
    below 1 are rejected.  A ``limit`` above MAX_LIMIT is clamped.
    """

    limit: int = DEFAULT_LIMIT
    page: int = 1
    sort: str | None = None
    text: str | None = None
    category: str | None = None
    status: bool | None = None
    in_stock: bool = False

    def __post_init__(self) -> None:
        for name in ("limit", "page"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be an integer")
            if value < 1:
                raise ValidationError(f"{name} must be at least 1, got {value}")
        if self.limit > MAX_LIMIT:
            object.__setattr__(self, "limit", MAX_LIMIT)
        # Text filters are stored stripped; blank is the same as no filter.
        for name in ("text", "category"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, value.strip() or None)

    @property
    def price_sort(self) -> PriceSort | None:
        return PriceSort.parse(self.sort)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def matches(self, product: Product) -> bool:
        """The single predicate used for both the page and the count."""
        if self.text is not None:
            needle = self.text.lower()
            if (
                needle not in product.title.lower()
                and needle not in product.description.lower()
            ):
                return False
        if self.category is not None:
            if self.category.lower() not in product.category.lower():
                return False
        if self.status is not None and product.status != self.status:
            return False
        if self.in_stock and not product.is_in_stock:
            return False
        return True

    def link_params(self, page: int) -> dict[str, str]:
        """Query parameters reproducing this query on another page."""
        params: dict[str, str] = {"limit": str(self.limit)}
        sort = self.price_sort
        if sort is not None:
            params["sort"] = sort.value
        if self.text is not None:
            params["query"] = self.text
        if self.category is not None:
            params["category"] = self.category
        if self.status is not None:
            params["status"] = "true" if self.status else "false"
        if self.in_stock:
            params["stock"] = "true"
        params["page"] = str(page)
        return params


@dataclass(frozen=True)
class ProductPage:
    items: list[Product]
    total_docs: int
    limit: int
    page: int
    total_pages: int

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def prev_page(self) -> int | None:
        return self.page - 1 if self.has_prev_page else None

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_next_page else None


def query_products(products: list[Product], query: ProductQuery) -> ProductPage:
    """Run a catalog query over a snapshot of products.

    Steps:
    1. Keep products matching every given filter.
    2. Stable-sort by price when a valid sort was requested; otherwise
       keep the store-native order.
    3. Slice ``[skip, skip + limit)``.
    """
    matching = [p for p in products if query.matches(p)]

    sort = query.price_sort
    if sort is not None:
        matching.sort(key=lambda p: p.price, reverse=sort is PriceSort.DESC)

    total_docs = len(matching)
    page = ProductPage(
        items=matching[query.skip:query.skip + query.limit],
        total_docs=total_docs,
        limit=query.limit,
        page=query.page,
        total_pages=math.ceil(total_docs / query.limit),
    )
    logger.debug(
        "Catalog query %s matched %d product(s), returning page %d/%d",
        query, total_docs, page.page, page.total_pages,
    )
    return page
