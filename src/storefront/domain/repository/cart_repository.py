"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique cart ID."""

    @abstractmethod
    def get_by_id(self, cart_id: str) -> Cart | None:
        """Return a cart by its ID, or None if not found."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart, assigning an ID if needed."""
