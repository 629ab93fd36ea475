"""Order aggregate.

An order owns its items and captures each item's price at the moment the
order is placed. The total is derived once, at creation, and stored; later
catalog price changes never reach an existing order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity

PENDING = "pending"


@dataclass(frozen=True)
class OrderItem:
    """One line of an order.

    ``product_id`` is a weak reference: it is stored as given and never
    checked against the catalog.
    """

    product_id: str
    quantity: Quantity
    unit_price: Money  # price-at-order-time snapshot

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for orders.

    Use ``Order.create()`` for new orders. The plain constructor is used to
    rebuild persisted orders without re-deriving the total.
    """

    id: str | None
    user_id: str
    items: list[OrderItem]
    status: str
    total_amount: Money
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def create(user_id: str, items: list[OrderItem], now: datetime) -> Order:
        if not user_id or not user_id.strip():
            raise ValidationError("user_id is required")
        if not items:
            raise ValidationError("order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            user_id=user_id.strip(),
            items=list(items),
            status=PENDING,
            total_amount=total,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def clean_status(status: str | None) -> str:
        """Any non-empty status is accepted; there is no transition table."""
        if not status or not status.strip():
            raise ValidationError("status is required")
        return status.strip()
