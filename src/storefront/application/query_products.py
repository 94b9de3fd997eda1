"""Application service: Query Products use case.

Runs the catalog query engine over the repository snapshot and turns
the page into a DTO with absolute prev/next links.
"""

from __future__ import annotations

from urllib.parse import urlencode

from storefront.application.dto import ProductPageDTO
from storefront.application.mapping import product_to_dto
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.product_query import ProductQuery, query_products


class QueryProductsHandler:

    def __init__(self, product_repo: ProductRepository, base_url: str) -> None:
        self._product_repo = product_repo
        self._base_url = base_url

    def handle(self, query: ProductQuery) -> ProductPageDTO:
        page = query_products(self._product_repo.list_all(), query)

        return ProductPageDTO(
            items=[product_to_dto(p) for p in page.items],
            total_docs=page.total_docs,
            total_pages=page.total_pages,
            page=page.page,
            limit=page.limit,
            has_prev_page=page.has_prev_page,
            has_next_page=page.has_next_page,
            prev_page=page.prev_page,
            next_page=page.next_page,
            prev_link=self._link(query, page.prev_page),
            next_link=self._link(query, page.next_page),
        )

    def _link(self, query: ProductQuery, page: int | None) -> str | None:
        if page is None:
            return None
        return f"{self._base_url}?{urlencode(query.link_params(page))}"
