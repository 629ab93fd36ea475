"""Application service: Order Builder.

Creates orders from caller-supplied items and updates their status.
Orders never consult the catalog: item prices are the ones the caller sent
(a point-in-time snapshot), product ids are not checked, and creating an
order does not touch stock.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from storefront.application.dto import OrderItemSpec
from storefront.domain.exceptions import EntityNotFoundError, PersistenceError, ValidationError
from storefront.domain.model import timestamps
from storefront.domain.model.identifiers import parse_id
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.timestamps import Clock
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.document_store import (
    ID_FIELD,
    Document,
    DocumentStore,
    DocumentUpdate,
)
from storefront.domain.service.pagination import (
    Page,
    PageRequest,
    equality_filter,
    fetch_page,
)

logger = structlog.get_logger(__name__)

COLLECTION = "orders"


class OrderBuilder:

    def __init__(self, store: DocumentStore, clock: Clock = timestamps.utcnow) -> None:
        self._orders = store.collection(COLLECTION)
        self._clock = clock

    def create(self, user_id: str, item_specs: list[OrderItemSpec]) -> Order:
        """Place a new order in ``pending`` status.

        The total is computed here, once, from the submitted quantities and
        prices and is never recomputed afterwards.
        """
        items = [self._build_item(spec) for spec in item_specs or []]
        order = Order.create(user_id=user_id, items=items, now=self._clock())

        order.id = self._orders.insert(self._to_document(order))
        logger.info(
            "Order created",
            order_id=order.id,
            user_id=order.user_id,
            total_amount=str(order.total_amount),
        )
        return order

    def get(self, order_id: str) -> Order:
        order_id = parse_id(order_id, "order")
        raw = self._orders.find_one({ID_FIELD: order_id})
        if raw is None:
            raise EntityNotFoundError("order not found")
        return self._to_domain(raw)

    def update_status(self, order_id: str, status: str) -> Order:
        """Overwrite the order status, whatever it was before."""
        order_id = parse_id(order_id, "order")
        status = Order.clean_status(status)

        raw = self._orders.find_one_and_update(
            {ID_FIELD: order_id},
            DocumentUpdate(
                set={
                    "status": status,
                    "updated_at": timestamps.to_storage(self._clock()),
                }
            ),
        )
        if raw is None:
            raise EntityNotFoundError("order not found")
        logger.info("Order status updated", order_id=order_id, status=status)
        return self._to_domain(raw)

    def list(self, user_id: str | None, page: int | None, limit: int | None) -> Page[Order]:
        return fetch_page(
            self._orders,
            equality_filter("user_id", user_id),
            PageRequest.normalize(page, limit),
            self._to_domain,
        )

    @staticmethod
    def _build_item(spec: OrderItemSpec) -> OrderItem:
        if not spec.product_id or not spec.product_id.strip():
            raise ValidationError("product_id is required for every item")
        return OrderItem(
            product_id=spec.product_id.strip(),
            quantity=Quantity(spec.quantity),
            unit_price=Money.of(spec.price, field="price"),
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_document(order: Order) -> Document:
        return {
            "user_id": order.user_id,
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
            "status": order.status,
            "total_amount": str(order.total_amount.amount),
            "created_at": timestamps.to_storage(order.created_at),
            "updated_at": timestamps.to_storage(order.updated_at),
        }

    @staticmethod
    def _to_domain(raw: Document) -> Order:
        try:
            items = [
                OrderItem(
                    product_id=i["product_id"],
                    quantity=Quantity(int(i["quantity"])),
                    unit_price=Money(Decimal(i["price"])),
                )
                for i in raw["items"]
            ]
            return Order(
                id=raw[ID_FIELD],
                user_id=raw["user_id"],
                items=items,
                status=raw["status"],
                total_amount=Money(Decimal(raw["total_amount"])),
                created_at=timestamps.from_storage(raw["created_at"]),
                updated_at=timestamps.from_storage(raw["updated_at"]),
            )
        except (KeyError, TypeError, ArithmeticError, ValueError, ValidationError) as exc:
            raise PersistenceError(f"failed to decode order: {exc}") from exc
