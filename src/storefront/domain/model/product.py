"""Product aggregate.

Products live independently of carts. They have their own lifecycle:
they are added to the catalog, partially updated and eventually deleted,
regardless of which carts still reference them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

# Fields a partial update may touch. ``id`` and ``code`` are identity.
UPDATABLE_FIELDS = frozenset(
    {"title", "description", "price", "stock", "category", "status", "thumbnails"}
)
IMMUTABLE_FIELDS = frozenset({"id", "code"})


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products; it validates every
    required field.  The JSON store also rebuilds records through it,
    so a hand-edited file cannot smuggle in a wrongly typed field.
    """

    id: str | None
    code: str
    title: str
    description: str
    price: Money
    stock: int
    category: str
    status: bool = True
    thumbnails: list[str] = field(default_factory=list)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        code: str,
        title: str,
        description: str,
        price: Money,
        stock: int,
        category: str,
        status: bool = True,
        thumbnails: list[str] | None = None,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        return Product(
            id=None,
            code=_require_text("code", code),
            title=_require_text("title", title),
            description=_require_text("description", description),
            price=price,
            stock=_validate_stock(stock),
            category=_require_text("category", category),
            status=_validate_status(status),
            thumbnails=_validate_thumbnails(thumbnails or []),
        )

    # --- Mutations ------------------------------------------------------------

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Apply a partial update.

        Every value is validated before any field is assigned, so a
        rejected update leaves the product untouched.
        """
        if not changes:
            raise ValidationError("No fields to update")

        locked = IMMUTABLE_FIELDS.intersection(changes)
        if locked:
            raise ValidationError(
                f"Field(s) cannot be updated: {', '.join(sorted(locked))}"
            )
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")

        validated: dict[str, Any] = {}
        for name, value in changes.items():
            if name in ("title", "description", "category"):
                validated[name] = _require_text(name, value)
            elif name == "price":
                validated[name] = value if isinstance(value, Money) else Money.of(value)
            elif name == "stock":
                validated[name] = _validate_stock(value)
            elif name == "status":
                validated[name] = _validate_status(value)
            elif name == "thumbnails":
                validated[name] = _validate_thumbnails(value)

        for name, value in validated.items():
            setattr(self, name, value)

    # --- Computed properties --------------------------------------------------

    @property
    def is_in_stock(self) -> bool:
        return self.stock > 0


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Product {name} is required")
    return value.strip()


def _validate_stock(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Stock must be an integer")
    if value < 0:
        raise ValidationError("Stock cannot be negative")
    return value


def _validate_status(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError("Status must be a boolean")
    return value


def _validate_thumbnails(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        raise ValidationError("Thumbnails must be a list of URLs")
    if not all(isinstance(url, str) for url in value):
        raise ValidationError("Every thumbnail must be a string")
    return [url.strip() for url in value]
