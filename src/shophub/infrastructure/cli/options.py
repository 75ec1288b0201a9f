"""Shared CLI options."""

from __future__ import annotations

import functools

import click

from shophub.domain.exceptions import DomainException, StockConflict
from shophub.domain.model.value_objects import Customer, UserId


def customer_options(func):
    """Add ``--user/--name/--email/--admin`` and pass a ``Customer``."""

    @click.option("--user", "user_id", required=True, envvar="SHOPHUB_USER", help="Acting user id.")
    @click.option("--name", "user_name", default="", help="Display name.")
    @click.option("--email", "user_email", default="", help="E-mail for notifications.")
    @click.option("--admin", "is_admin", is_flag=True, default=False, help="Act as an admin.")
    @functools.wraps(func)
    def wrapper(*args, user_id: str, user_name: str, user_email: str, is_admin: bool, **kwargs):
        try:
            customer = Customer(
                user_id=UserId(user_id), name=user_name, email=user_email, is_admin=is_admin
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))
        return func(*args, customer=customer, **kwargs)

    return wrapper


def fail(exc: DomainException) -> click.ClickException:
    """Turn a domain error into a CLI error, listing conflicting lines."""
    if isinstance(exc, StockConflict):
        lines = [str(exc)]
        for line in exc.lines:
            mark = "OK " if line.satisfiable else "OUT"
            lines.append(
                f"  [{mark}] #{line.product_code} {line.product_name}: "
                f"requested {line.requested}, available {line.available}"
            )
        return click.ClickException("\n".join(lines))
    return click.ClickException(str(exc))
