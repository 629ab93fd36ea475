"""Product aggregate.

Products live independently of orders. Their descriptive fields are
replaced wholesale by updates; the stock count only ever moves through
atomic increments so concurrent adjustments never overwrite one another.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductDetails:
    """The caller-editable fields of a product (everything except stock)."""

    name: str
    description: str
    price: Money
    category: str

    @staticmethod
    def of(
        name: str,
        description: str,
        price: str | float | int | Decimal,
        category: str,
    ) -> ProductDetails:
        if not name or not name.strip():
            raise ValidationError("product name is required")
        return ProductDetails(
            name=name.strip(),
            description=description or "",
            price=Money.of(price, field="price"),
            category=category or "",
        )


@dataclass
class Product:
    """A product in the catalog.

    ``stock_quantity`` is never negative once an operation on the product
    has completed.
    """

    id: str | None
    name: str
    description: str
    price: Money
    stock_quantity: int
    category: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def create(details: ProductDetails, stock_quantity: int, now: datetime) -> Product:
        """Build a new, not yet persisted product."""
        if not isinstance(stock_quantity, int) or isinstance(stock_quantity, bool):
            raise ValidationError("stock quantity must be an integer")
        if stock_quantity < 0:
            raise ValidationError("stock quantity cannot be negative")
        return Product(
            id=None,
            name=details.name,
            description=details.description,
            price=details.price,
            stock_quantity=stock_quantity,
            category=details.category,
            created_at=now,
            updated_at=now,
        )
