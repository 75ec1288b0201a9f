import dataclasses
from pathlib import Path

import click

from shophub.infrastructure.bootstrap import build_container
from shophub.infrastructure.cli.cart_commands import cart_add, cart_remove, cart_set, cart_show
from shophub.infrastructure.cli.inventory_commands import (
    inventory_reconcile,
    inventory_set,
    inventory_show,
)
from shophub.infrastructure.cli.order_commands import (
    order_list,
    order_place,
    order_show,
    order_status,
)
from shophub.infrastructure.cli.product_commands import product_add, product_list, product_update
from shophub.infrastructure.cli.review_commands import (
    review_add,
    review_delete,
    review_edit,
    review_list,
)
from shophub.infrastructure.config import Settings
from shophub.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON data file (defaults to $SHOPHUB_DATA_FILE or ./data/shophub.json).",
)
@click.pass_context
def cli(ctx: click.Context, data_file: Path | None) -> None:
    """Shophub: orders, carts, stock and reviews."""
    settings = Settings.from_env()
    if data_file is not None:
        settings = dataclasses.replace(settings, data_file=data_file)
    configure_logging(settings.log_level, settings.log_json)

    container = build_container(settings)
    ctx.call_on_close(container.close)
    ctx.obj = container


@cli.group()
def product() -> None:
    """Manage the catalogue."""


@cli.group()
def inventory() -> None:
    """Manage stock."""


@cli.group()
def cart() -> None:
    """Manage a customer's cart."""


@cli.group()
def order() -> None:
    """Place and track orders."""


@cli.group()
def review() -> None:
    """Write and moderate reviews."""


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, type=int, show_default=True)
@click.pass_obj
def serve(container, host: str, port: int) -> None:
    """Run the HTTP API."""
    import uvicorn

    from shophub.infrastructure.api.app import create_app

    uvicorn.run(create_app(container), host=host, port=port, log_config=None)


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
inventory.add_command(inventory_reconcile)
cart.add_command(cart_add)
cart.add_command(cart_set)
cart.add_command(cart_remove)
cart.add_command(cart_show)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_status)
review.add_command(review_add)
review.add_command(review_edit)
review.add_command(review_delete)
review.add_command(review_list)
