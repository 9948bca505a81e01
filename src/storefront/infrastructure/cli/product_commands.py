"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.show_products import ListProductsHandler
from storefront.application.update_product import ChangeStockHandler, UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.actor import Actor
from storefront.infrastructure.bootstrap import build_services

# Commands run by an operator at the console act as the seller.
CLI_SELLER = Actor.seller("cli")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="Catalog category.")
@click.option("--price", required=True, help="List price (e.g. 120.00).")
@click.option("--offer-price", default=None, help="Discounted price, at most the list price.")
@click.option("--image", "images", multiple=True, help="Image reference; repeatable.")
@click.option("--rating", default=0, type=click.IntRange(0, 5), help="Rating 0-5.")
def product_add(
    name: str,
    category: str,
    price: str,
    offer_price: str | None,
    images: tuple[str, ...],
    rating: int,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(build_services().unit_of_work())

    try:
        dto = handler.handle(
            CLI_SELLER,
            name=name,
            category=category,
            price=price,
            offer_price=offer_price,
            images=list(images),
            rating=rating,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at {dto.price} {dto.currency}")


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
def product_list(category: str | None) -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(build_services().unit_of_work()).handle(category)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<20} {'Price':>10} {'Offer':>10} {'Stock':>6}")
    click.echo("-" * 84)
    for p in products:
        offer = f"{p.offer_price:.2f}" if p.offer_price is not None else "-"
        stock = "yes" if p.in_stock else "no"
        click.echo(f"{p.id:<34} {p.name:<20} {p.price:>10.2f} {offer:>10} {stock:>6}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New list price (e.g. 29.99).")
@click.option("--offer-price", default=None, help="New offer price; omit to clear it.")
def product_update(product_id: str, price: str, offer_price: str | None) -> None:
    """Update a product's price."""
    services = build_services()
    handler = UpdateProductHandler(services.unit_of_work(), services.product_locks)

    try:
        handler.handle(CLI_SELLER, product_id, price, offer_price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} price updated to {price}")


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--in-stock/--out-of-stock", default=True, show_default=True, help="New availability.")
def product_stock(product_id: str, in_stock: bool) -> None:
    """Mark a product as available or unavailable."""
    services = build_services()
    handler = ChangeStockHandler(services.unit_of_work(), services.product_locks)

    try:
        handler.handle(CLI_SELLER, product_id, in_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    state = "in stock" if in_stock else "out of stock"
    click.echo(f"Product {product_id} is now {state}")
