"""CLI commands for carts."""

from __future__ import annotations

import click

from shophub.application.dto import CartDTO
from shophub.domain.exceptions import DomainException
from shophub.domain.model.value_objects import ProductCode
from shophub.infrastructure.cli.options import customer_options, fail


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo("Cart is empty.")
        return
    click.echo(f"  {'Code':<6} {'Product':<24} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*48}")
    for item in dto.items:
        click.echo(f"  {item.product_code:<6} {item.product_name:<24} {item.quantity:>5} {item.unit_price:>10}")


@click.command("add")
@customer_options
@click.option("--code", required=True, type=int, help="Product code.")
@click.option("--quantity", default=1, type=int, show_default=True)
@click.pass_obj
def cart_add(container, customer, code: int, quantity: int) -> None:
    """Add a product to the cart."""
    try:
        dto = container.add_to_cart().handle(customer, ProductCode(code), quantity)
    except DomainException as exc:
        raise fail(exc)
    _display_cart(dto)


@click.command("set")
@customer_options
@click.option("--code", required=True, type=int, help="Product code.")
@click.option("--quantity", required=True, type=int, help="New quantity; 0 removes the line.")
@click.pass_obj
def cart_set(container, customer, code: int, quantity: int) -> None:
    """Change the quantity of a cart line."""
    try:
        dto = container.update_cart().handle(customer, ProductCode(code), quantity)
    except DomainException as exc:
        raise fail(exc)
    _display_cart(dto)


@click.command("remove")
@customer_options
@click.option("--code", required=True, type=int, help="Product code.")
@click.pass_obj
def cart_remove(container, customer, code: int) -> None:
    """Remove a product from the cart."""
    dto = container.remove_from_cart().handle(customer, ProductCode(code))
    _display_cart(dto)


@click.command("show")
@customer_options
@click.pass_obj
def cart_show(container, customer) -> None:
    """Show the cart."""
    _display_cart(container.show_cart().handle(customer))
