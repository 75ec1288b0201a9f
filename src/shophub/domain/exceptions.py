"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and map them to
user-facing messages and status codes.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class UnknownProductError(ValidationError):
    """A request referenced a product code that is not in the catalogue."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ForbiddenError(DomainException):
    """The caller is not allowed to touch the requested entity."""


class CheckoutConflict(DomainException):
    """Checkout lost a race: the cart or its reservations changed underneath it.

    Nothing was committed.  The client may simply retry.
    """


class PersistenceError(DomainException):
    """The storage layer failed; the operation must be treated as not done."""


@dataclass(frozen=True)
class ConflictLine:
    """Availability of one cart line at checkout time."""

    product_code: int
    product_name: str
    requested: int
    available: int

    @property
    def satisfiable(self) -> bool:
        return self.available >= self.requested


class StockConflict(DomainException):
    """One or more cart lines could not be reserved at checkout.

    ``lines`` holds every checked line so the client can adjust its cart;
    ``unavailable`` narrows that to the lines that actually failed.
    """

    def __init__(self, lines: list[ConflictLine]) -> None:
        self.lines = list(lines)
        names = ", ".join(line.product_name for line in self.unavailable)
        super().__init__(f"Out of stock: {names}")

    @property
    def unavailable(self) -> list[ConflictLine]:
        return [line for line in self.lines if not line.satisfiable]
