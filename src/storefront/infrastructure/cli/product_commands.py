"""CLI commands for the Product aggregate."""

from __future__ import annotations

from typing import Any

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductDTO, ProductPageDTO
from storefront.application.query_products import QueryProductsHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.service.product_query import DEFAULT_LIMIT, ProductQuery, parse_flag
from storefront.infrastructure.bootstrap import product_repository, settings
from storefront.infrastructure.cli.output import CommandError, emit


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product #{dto.id}  [{dto.code}]  {dto.title}")
    click.echo(f"  {dto.description}")
    click.echo(f"  Category:  {dto.category}")
    click.echo(f"  Price:     {dto.price}")
    click.echo(f"  Stock:     {dto.stock}")
    click.echo(f"  Available: {'yes' if dto.status else 'no'}")
    for url in dto.thumbnails:
        click.echo(f"  Thumbnail: {url}")


def _display_page(page: ProductPageDTO) -> None:
    if not page.items:
        click.echo("No products found.")
    else:
        click.echo(f"{'ID':<6} {'Code':<10} {'Title':<24} {'Category':<14} {'Price':>10} {'Stock':>6}")
        click.echo("-" * 75)
        for p in page.items:
            click.echo(
                f"{p.id:<6} {p.code:<10} {p.title:<24} {p.category:<14} {p.price:>10} {p.stock:>6}"
            )
    click.echo()
    click.echo(
        f"Page {page.page} of {page.total_pages}  ({page.total_docs} matching, {page.limit} per page)"
    )
    if page.prev_link:
        click.echo(f"Prev: {page.prev_link}")
    if page.next_link:
        click.echo(f"Next: {page.next_link}")


@click.command("add")
@click.option("--code", required=True, help="Unique product code.")
@click.option("--title", required=True, help="Product title.")
@click.option("--description", required=True, help="Product description.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--category", required=True, help="Category label.")
@click.option("--status/--no-status", default=True, help="Availability flag.")
@click.option("--thumbnail", "thumbnails", multiple=True, help="Thumbnail URL (repeatable).")
def product_add(
    code: str,
    title: str,
    description: str,
    price: str,
    stock: int,
    category: str,
    status: bool,
    thumbnails: tuple[str, ...],
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            code=code,
            title=title,
            description=description,
            price=price,
            stock=stock,
            category=category,
            status=status,
            thumbnails=list(thumbnails),
        )
    except DomainException as exc:
        raise CommandError(exc)

    emit(
        dto,
        lambda: click.echo(f"Product #{dto.id} '{dto.title}' added at {dto.price}"),
        message="Product created",
    )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product."""
    handler = ShowProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise CommandError(exc)

    emit(dto, lambda: _display_product(dto))


@click.command("list")
@click.option("--limit", type=click.IntRange(min=1), default=DEFAULT_LIMIT, show_default=True,
              help="Products per page (capped at 100).")
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True,
              help="Page number.")
@click.option("--sort", default=None, help="Sort by price: 'asc' or 'desc'.")
@click.option("--query", "text", default=None, help="Search title and description.")
@click.option("--category", default=None, help="Filter by category.")
@click.option("--status", default=None, help="Availability filter ('true', '1', 'on' = available).")
@click.option("--in-stock", is_flag=True, help="Only products with stock left.")
def product_list(
    limit: int,
    page: int,
    sort: str | None,
    text: str | None,
    category: str | None,
    status: str | None,
    in_stock: bool,
) -> None:
    """List products with filtering, sorting and pagination."""
    config = settings()
    handler = QueryProductsHandler(
        product_repo=product_repository(config),
        base_url=config.base_url,
    )

    try:
        query = ProductQuery(
            limit=limit,
            page=page,
            sort=sort,
            text=text,
            category=category,
            status=parse_flag(status),
            in_stock=in_stock,
        )
        result = handler.handle(query)
    except DomainException as exc:
        raise CommandError(exc)

    emit(result, lambda: _display_page(result))


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--title", default=None, help="New title.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", type=int, default=None, help="New stock level.")
@click.option("--category", default=None, help="New category.")
@click.option("--status/--no-status", default=None, help="New availability flag.")
@click.option("--thumbnail", "thumbnails", multiple=True,
              help="Replacement thumbnail URL (repeatable).")
def product_update(product_id: str, thumbnails: tuple[str, ...], **fields: Any) -> None:
    """Update some fields of a product. The ID and code never change."""
    changes = {name: value for name, value in fields.items() if value is not None}
    if thumbnails:
        changes["thumbnails"] = list(thumbnails)

    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id=product_id, changes=changes)
    except DomainException as exc:
        raise CommandError(exc)

    emit(
        dto,
        lambda: click.echo(f"Product #{dto.id} updated: {', '.join(sorted(changes))}"),
        message="Product updated",
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Delete a product. Carts keep their lines for it."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise CommandError(exc)

    emit(
        None,
        lambda: click.echo(f"Product #{product_id} deleted"),
        message="Product deleted",
    )
