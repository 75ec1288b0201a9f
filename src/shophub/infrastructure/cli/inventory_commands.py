"""CLI commands for stock management."""

from __future__ import annotations

import click

from shophub.domain.exceptions import DomainException
from shophub.domain.model.value_objects import ProductCode
from shophub.infrastructure.cli.options import fail


@click.command("set")
@click.option("--code", required=True, type=int, help="Product code.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
@click.pass_obj
def inventory_set(container, code: int, quantity: int) -> None:
    """Set the stock level for a product."""
    handler = container.set_stock()

    try:
        handler.handle(ProductCode(code), quantity)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Stock for product #{code} set to {quantity}")


@click.command("show")
@click.pass_obj
def inventory_show(container) -> None:
    """Show current stock levels and open checkout holds."""
    lines = container.show_inventory().handle()

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'Code':<6} {'Product':<24} {'In stock':>9} {'Held':>6}")
    click.echo("-" * 48)
    for line in lines:
        click.echo(f"{line.product_code:<6} {line.product_name:<24} {line.in_stock:>9} {line.held:>6}")


@click.command("reconcile")
@click.pass_obj
def inventory_reconcile(container) -> None:
    """Release stock held by checkouts that never committed."""
    try:
        released = container.reconcile().handle()
    except DomainException as exc:
        raise fail(exc)

    if not released:
        click.echo("No expired holds.")
        return
    for hold in released:
        click.echo(f"Released {hold.quantity} of product #{hold.product_code} (checkout {hold.checkout_id})")
