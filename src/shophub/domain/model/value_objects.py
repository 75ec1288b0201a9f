"""Value Objects and identifiers shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.

Identifiers
-----------
``ProductCode`` is the sequential catalogue number.  It is the externally
stable key: URLs, carts, orders and reviews all refer to products by it.
``OrderId`` is likewise sequential and is the only order identifier.
Review, hold and checkout ids are storage-internal uuid hex strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import NewType
from uuid import uuid4

from shophub.domain.exceptions import ValidationError

ProductCode = NewType("ProductCode", int)
OrderId = NewType("OrderId", int)
UserId = NewType("UserId", str)
ReviewId = NewType("ReviewId", str)
HoldId = NewType("HoldId", str)
CheckoutId = NewType("CheckoutId", str)

DEFAULT_CURRENCY = "INR"
_MINOR_UNIT = Decimal("0.01")
_SYMBOLS = {"INR": "₹", "USD": "$", "EUR": "€"}


def new_token() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point drift.  Arithmetic keeps full
    precision; call ``rounded()`` once at the end of a calculation.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def rounded(self) -> Money:
        """Round half-up to the currency's minor unit."""
        return Money(self.amount.quantize(_MINOR_UNIT, rounding=ROUND_HALF_UP), self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        symbol = _SYMBOLS.get(self.currency, self.currency + " ")
        return f"{symbol}{self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        return Money(value, currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a quantity
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Rating:
    """A review score: whole stars from 1 to 5."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Rating must be an integer, got {type(self.value).__name__}"
            )
        if not 1 <= self.value <= 5:
            raise ValidationError(f"Rating must be between 1 and 5, got {self.value}")


@dataclass(frozen=True)
class Customer:
    """The authenticated caller, as vouched for by the identity provider."""

    user_id: UserId
    name: str = ""
    email: str = ""
    is_admin: bool = False

    def __post_init__(self) -> None:
        if not self.user_id or not str(self.user_id).strip():
            raise ValidationError("User id is required")

    @property
    def display_name(self) -> str:
        return self.name or str(self.user_id)
