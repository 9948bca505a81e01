"""CLI commands for the Order aggregate (seller side)."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.list_orders import GetAllOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.actor import Actor
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import build_services

CLI_SELLER = Actor.seller("cli")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status}, paid={'yes' if dto.is_paid else 'no'})")
    click.echo(f"Buyer:    {dto.buyer_id}")
    click.echo(f"Created:  {dto.created_at.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo(f"Ship to:  {dto.address.recipient}, {dto.address.street}, {dto.address.city}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>10.2f} {item.line_total:>10.2f}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.amount:>16.2f} {dto.currency}")


@click.command("list")
@click.option("--buyer", "buyer_id", default=None, help="Only orders of this buyer.")
def order_list(buyer_id: str | None) -> None:
    """List orders, newest first."""
    orders = GetAllOrdersHandler(build_services().unit_of_work()).handle(CLI_SELLER)
    if buyer_id:
        orders = [o for o in orders if o.buyer_id == buyer_id]

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<34} {'Buyer':<16} {'Status':<14} {'Amount':>10}")
    click.echo("-" * 77)
    for o in orders:
        click.echo(f"{o.id:<34} {o.buyer_id:<16} {o.status:<14} {o.amount:>10.2f}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(build_services().unit_of_work())

    try:
        dto = handler.handle(CLI_SELLER, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.name for s in OrderStatus], case_sensitive=False),
    help="New status.",
)
def order_status(order_id: str, status: str) -> None:
    """Move an order along Placed -> Shipped -> Delivered, or cancel it."""
    services = build_services()
    handler = UpdateOrderStatusHandler(services.unit_of_work(), services.order_locks)

    try:
        dto = handler.handle(CLI_SELLER, order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} is now '{dto.status}'")
