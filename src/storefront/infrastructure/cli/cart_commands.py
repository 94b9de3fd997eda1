"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from storefront.application.cart_items import (
    AddCartItemHandler,
    ClearCartHandler,
    RemoveCartItemHandler,
    ReplaceCartItemsHandler,
    SetCartItemQuantityHandler,
)
from storefront.application.create_cart import CreateCartHandler
from storefront.application.dto import CartDTO, CartItemSpec
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    product_repository,
    settings,
)
from storefront.infrastructure.cli.output import CommandError, emit


def _repos() -> dict:
    config = settings()
    return {
        "cart_repo": cart_repository(config),
        "product_repo": product_repository(config),
    }


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse '3:2,7:1' (product ID:quantity) into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    if not raw.strip():
        return specs
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(CartItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying a cart."""
    click.echo(f"Cart #{dto.id}  ({dto.total_quantity} unit(s))")
    click.echo(f"Updated: {dto.updated_at}")
    click.echo()

    if not dto.items:
        click.echo("  (empty)")
        return

    click.echo(f"  {'ID':<6} {'Product':<24} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*48}")
    for item in dto.items:
        if item.product is None:
            title, price = "(unavailable)", "-"
        else:
            title, price = item.product.title, item.product.price
        click.echo(f"  {item.product_id:<6} {title:<24} {item.quantity:>5} {price:>10}")


@click.command("create")
def cart_create() -> None:
    """Create a new, empty cart."""
    handler = CreateCartHandler(**_repos())

    try:
        dto = handler.handle()
    except DomainException as exc:
        raise CommandError(exc)

    emit(dto, lambda: click.echo(f"Cart #{dto.id} created"), message="Cart created")


@click.command("show")
@click.option("--id", "cart_id", required=True, help="Cart ID.")
@click.option("--no-details", is_flag=True, help="Do not resolve product details.")
def cart_show(cart_id: str, no_details: bool) -> None:
    """Show a cart and its lines."""
    handler = ShowCartHandler(**_repos())

    try:
        dto = handler.handle(cart_id, include_product_details=not no_details)
    except DomainException as exc:
        raise CommandError(exc)

    emit(dto, lambda: _display_cart(dto))


@click.command("add")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_add(cart_id: str, product_id: str) -> None:
    """Add one unit of a product to a cart."""
    handler = AddCartItemHandler(**_repos())

    try:
        dto = handler.handle(cart_id, product_id)
    except DomainException as exc:
        raise CommandError(exc)

    emit(dto, lambda: _display_cart(dto), message="Product added to cart")


@click.command("set")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (>= 1).")
def cart_set(cart_id: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a product already in a cart."""
    handler = SetCartItemQuantityHandler(**_repos())

    try:
        dto = handler.handle(cart_id, product_id, quantity)
    except DomainException as exc:
        raise CommandError(exc)

    emit(dto, lambda: _display_cart(dto), message="Quantity updated")


@click.command("remove")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(cart_id: str, product_id: str) -> None:
    """Remove a product's line from a cart."""
    handler = RemoveCartItemHandler(**_repos())

    try:
        dto = handler.handle(cart_id, product_id)
    except DomainException as exc:
        raise CommandError(exc)

    emit(dto, lambda: _display_cart(dto), message="Product removed from cart")


@click.command("replace")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--items", required=True, help="Lines as 'ProductID:Qty,ProductID:Qty'.")
def cart_replace(cart_id: str, items: str) -> None:
    """Replace every line of a cart."""
    specs = _parse_items(items)
    handler = ReplaceCartItemsHandler(**_repos())

    try:
        dto = handler.handle(cart_id, specs)
    except DomainException as exc:
        raise CommandError(exc)

    emit(dto, lambda: _display_cart(dto), message="Cart lines replaced")


@click.command("clear")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
def cart_clear(cart_id: str) -> None:
    """Remove every line from a cart."""
    handler = ClearCartHandler(**_repos())

    try:
        dto = handler.handle(cart_id)
    except DomainException as exc:
        raise CommandError(exc)

    emit(dto, lambda: _display_cart(dto), message="Cart cleared")
