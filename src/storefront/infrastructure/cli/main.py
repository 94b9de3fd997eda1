import click

from storefront.infrastructure.bootstrap import settings
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_create,
    cart_remove,
    cart_replace,
    cart_set,
    cart_show,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from storefront.infrastructure.logger import configure_logging


@click.group()
@click.option("--json", "as_json", is_flag=True, help="Print the JSON response envelope.")
@click.pass_context
def cli(ctx: click.Context, as_json: bool) -> None:
    """Storefront — product catalog and shopping carts"""
    ctx.ensure_object(dict)
    ctx.obj["json"] = as_json
    configure_logging(settings().log_level)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_create)
cart.add_command(cart_remove)
cart.add_command(cart_replace)
cart.add_command(cart_set)
cart.add_command(cart_show)
