"""CLI commands for the catalogue."""

from __future__ import annotations

import click

from shophub.domain.exceptions import DomainException
from shophub.domain.model.value_objects import ProductCode
from shophub.infrastructure.cli.options import fail


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, help="Opening stock.")
@click.option("--category", default="", help="Category.")
@click.pass_obj
def product_add(container, name: str, price: str, stock: int, category: str) -> None:
    """Add a new product to the catalogue."""
    handler = container.add_product()

    try:
        product = handler.handle(name=name, price=price, stock=stock, category=category)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Product #{product.code} '{product.name}' added at {product.price} ({product.stock} in stock)")


@click.command("list")
@click.pass_obj
def product_list(container) -> None:
    """List all products in the catalogue."""
    products = container.storage.products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'Code':<6} {'Name':<24} {'Price':>10} {'Stock':>7} {'Rating':>7} {'Reviews':>8}")
    click.echo("-" * 67)
    for p in products:
        click.echo(
            f"{p.code:<6} {p.name:<24} {str(p.price):>10} {p.stock:>7} {str(p.rating):>7} {p.review_count:>8}"
        )


@click.command("update")
@click.option("--code", required=True, type=int, help="Product code.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--name", default=None, help="New name.")
@click.pass_obj
def product_update(container, code: int, price: str | None, name: str | None) -> None:
    """Update a product's price or name."""
    handler = container.update_product()

    try:
        product = handler.handle(ProductCode(code), new_price=price, new_name=name)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Product #{product.code} is now '{product.name}' at {product.price}")
