"""Data Transfer Objects: plain containers that cross layer boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested order line, priced by the caller."""

    product_id: str
    quantity: int
    price: str | float | int | Decimal
