import click

from storefront.infrastructure.cli.order_commands import (
    order_list,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_stock,
    product_update,
)
from storefront.infrastructure.cli.server_commands import seed, serve
from storefront.infrastructure.cli.token_commands import token_issue
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Storefront: catalog, cart and order backend"""
    settings = Settings.from_env()
    configure_logging(settings.log_level, json=settings.log_json)


@cli.group()
def order() -> None:
    """Inspect and fulfill orders."""


@cli.group()
def product() -> None:
    """Manage the catalog."""


@cli.group()
def token() -> None:
    """Issue credential tokens (development)."""


# Register subcommands
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_stock)
product.add_command(product_update)
token.add_command(token_issue)
cli.add_command(seed)
cli.add_command(serve)
