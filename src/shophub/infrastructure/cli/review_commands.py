"""CLI commands for reviews."""

from __future__ import annotations

import click

from shophub.domain.exceptions import DomainException
from shophub.domain.model.value_objects import ProductCode, ReviewId
from shophub.infrastructure.cli.options import customer_options, fail


@click.command("add")
@customer_options
@click.option("--code", required=True, type=int, help="Product code.")
@click.option("--rating", required=True, type=click.IntRange(1, 5))
@click.option("--comment", default="")
@click.pass_obj
def review_add(container, customer, code: int, rating: int, comment: str) -> None:
    """Review a product."""
    try:
        dto = container.add_review().handle(customer, ProductCode(code), rating, comment)
    except DomainException as exc:
        raise fail(exc)
    click.echo(f"Review {dto.id} added ({dto.rating}/5).")


@click.command("edit")
@customer_options
@click.option("--id", "review_id", required=True)
@click.option("--rating", default=None, type=click.IntRange(1, 5))
@click.option("--comment", default=None)
@click.pass_obj
def review_edit(container, customer, review_id: str, rating: int | None, comment: str | None) -> None:
    """Edit one of your reviews."""
    try:
        dto = container.edit_review().handle(customer, ReviewId(review_id), rating=rating, comment=comment)
    except DomainException as exc:
        raise fail(exc)
    click.echo(f"Review {dto.id} updated ({dto.rating}/5).")


@click.command("delete")
@customer_options
@click.option("--id", "review_id", required=True)
@click.pass_obj
def review_delete(container, customer, review_id: str) -> None:
    """Delete a review (yours, or any as admin)."""
    try:
        dto = container.delete_review().handle(customer, ReviewId(review_id))
    except DomainException as exc:
        raise fail(exc)
    click.echo(f"Review {dto.id} deleted.")


@click.command("list")
@click.option("--code", required=True, type=int, help="Product code.")
@click.pass_obj
def review_list(container, code: int) -> None:
    """List a product's reviews."""
    try:
        reviews = container.list_reviews().handle(ProductCode(code))
    except DomainException as exc:
        raise fail(exc)

    if not reviews:
        click.echo("No reviews yet.")
        return
    for dto in reviews:
        click.echo(f"{dto.id}  {dto.rating}/5  {dto.author_name}: {dto.comment}")
