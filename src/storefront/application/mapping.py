"""Domain -> DTO mapping shared by the query and cart handlers."""

from __future__ import annotations

from storefront.application.dto import CartDTO, CartItemDTO, ProductDTO
from storefront.domain.model.cart import Cart
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        code=product.code,
        title=product.title,
        description=product.description,
        price=str(product.price),
        stock=product.stock,
        category=product.category,
        status=product.status,
        thumbnails=list(product.thumbnails),
    )


def cart_to_dto(
    cart: Cart,
    product_repo: ProductRepository,
    include_product_details: bool = True,
) -> CartDTO:
    """Map a cart, resolving each line's product when asked to.

    Lines whose product no longer exists populate as ``product=None``.
    """
    items = []
    for item in cart.items:
        product = None
        if include_product_details:
            found = product_repo.get_by_id(item.product_id)
            product = product_to_dto(found) if found is not None else None
        items.append(
            CartItemDTO(
                product_id=item.product_id,
                quantity=item.quantity.value,
                product=product,
            )
        )
    return CartDTO(
        id=cart.id,  # type: ignore[arg-type]
        items=items,
        total_quantity=cart.total_quantity,
        created_at=cart.created_at.strftime(_TIMESTAMP_FORMAT),
        updated_at=cart.updated_at.strftime(_TIMESTAMP_FORMAT),
    )
