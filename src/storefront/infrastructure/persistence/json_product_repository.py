"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import RepositoryError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import (
    ensure_file,
    load_records,
    next_numeric_id,
    persist_records,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return next_numeric_id(load_records(self._file_path))

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_code(self, code: str) -> Product | None:
        for product in self._load().values():
            if product.code == code:
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        if product.id is None:
            product.id = self.next_id()
        products[product.id] = product
        self._persist(products)

    def delete(self, product_id: str) -> bool:
        products = self._load()
        if products.pop(product_id, None) is None:
            return False
        self._persist(products)
        return True

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        products: dict[str, Product] = {}
        for item in load_records(self._file_path):
            try:
                # Product.create re-checks every field type read from disk.
                product = Product.create(
                    code=item["code"],
                    title=item["title"],
                    description=item["description"],
                    price=Money(Decimal(item["price"]), item.get("currency", "USD")),
                    stock=item["stock"],
                    category=item["category"],
                    status=item.get("status", True),
                    thumbnails=item.get("thumbnails", []),
                )
                product.id = str(item["id"])
            except (KeyError, TypeError, ArithmeticError, ValidationError) as exc:
                raise RepositoryError(
                    f"Malformed product record in {self._file_path}: {exc}"
                ) from exc
            products[product.id] = product
        return products

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "code": p.code,
                "title": p.title,
                "description": p.description,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "stock": p.stock,
                "category": p.category,
                "status": p.status,
                "thumbnails": p.thumbnails,
            }
            for p in products.values()
        ]
        persist_records(self._file_path, raw)
