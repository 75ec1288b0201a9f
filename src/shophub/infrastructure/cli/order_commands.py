"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from shophub.application.dto import OrderDTO
from shophub.domain.exceptions import DomainException
from shophub.domain.model.value_objects import OrderId
from shophub.infrastructure.cli.options import customer_options, fail


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.user_name}")
    click.echo(f"Placed:   {dto.placed_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price_display:>10} {item.line_total_display:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total_display:>20}")


@click.command("place")
@customer_options
@click.pass_obj
def order_place(container, customer) -> None:
    """Check out the customer's cart."""
    try:
        dto = container.place_order().handle(customer)
    except DomainException as exc:
        raise fail(exc)

    _display_order(dto)


@click.command("show")
@customer_options
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(container, customer, order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = container.show_order().handle(customer, OrderId(order_id))
    except DomainException as exc:
        raise fail(exc)

    _display_order(dto)


@click.command("list")
@customer_options
@click.option("--all", "everyone", is_flag=True, default=False, help="Every customer's orders (admin).")
@click.pass_obj
def order_list(container, customer, everyone: bool) -> None:
    """List orders, newest first."""
    try:
        orders = container.list_orders().handle(customer, everyone=everyone)
    except DomainException as exc:
        raise fail(exc)

    if not orders:
        click.echo("No orders found.")
        return
    for dto in orders:
        click.echo(f"#{dto.id:<6} {dto.placed_at}  {dto.status:<10} {dto.total_display:>12}  {dto.user_name}")


@click.command("status")
@customer_options
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--to",
    "status",
    required=True,
    type=click.Choice(["Shipped", "Delivered"], case_sensitive=False),
    help="Next status.",
)
@click.pass_obj
def order_status(container, customer, order_id: int, status: str) -> None:
    """Move an order to its next status (admin)."""
    try:
        dto = container.advance_order_status().handle(customer, OrderId(order_id), status)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order #{dto.id} is now {dto.status}.")
