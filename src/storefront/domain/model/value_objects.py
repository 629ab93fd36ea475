"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

# Amounts above this are rejected so API output stays a finite JSON number.
MAX_AMOUNT = Decimal("1000000000000")


@dataclass(frozen=True)
class Money:
    """A non-negative decimal amount.

    Decimal keeps order totals exact: 3 x 0.10 is 0.30, not
    0.30000000000000004.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")
        if self.amount > MAX_AMOUNT:
            raise ValidationError(f"Money amount cannot exceed {MAX_AMOUNT}, got {self.amount}")

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal, field: str = "amount") -> Money:
        """Coerce *amount* to Decimal, reporting bad input against *field*."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid {field}: {amount!r}")
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid {field}: {amount!r}") from exc
        if value.is_finite() and value < 0:
            raise ValidationError(f"{field} cannot be negative")
        if value.is_finite() and value > MAX_AMOUNT:
            raise ValidationError(f"{field} cannot exceed {MAX_AMOUNT}")
        return Money(value)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity of a single order item."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
