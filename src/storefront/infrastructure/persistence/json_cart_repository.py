"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.exceptions import RepositoryError, ValidationError
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import (
    ensure_file,
    load_records,
    next_numeric_id,
    persist_records,
)


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path)

    # --- CartRepository interface ---------------------------------------------

    def next_id(self) -> str:
        return next_numeric_id(load_records(self._file_path))

    def get_by_id(self, cart_id: str) -> Cart | None:
        for raw in load_records(self._file_path):
            if str(raw.get("id")) == cart_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        carts = load_records(self._file_path)

        if cart.id is None:
            cart.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(carts):
            if str(raw.get("id")) == cart.id:
                carts[i] = self._to_raw(cart)
                break
        else:
            carts.append(self._to_raw(cart))

        persist_records(self._file_path, carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "created_at": cart.created_at.isoformat(),
            "updated_at": cart.updated_at.isoformat(),
            "items": [
                {"product_id": item.product_id, "quantity": item.quantity.value}
                for item in cart.items
            ],
        }

    def _to_domain(self, raw: dict) -> Cart:
        try:
            items = [
                CartItem(product_id=str(i["product_id"]), quantity=Quantity(i["quantity"]))
                for i in raw["items"]
            ]
            return Cart(
                id=str(raw["id"]),
                items=items,
                created_at=datetime.fromisoformat(raw["created_at"]),
                updated_at=datetime.fromisoformat(raw["updated_at"]),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise RepositoryError(f"Malformed cart record in {self._file_path}") from exc
