"""Integration tests for the Order Builder.

Runs against the in-memory document store; no file I/O.
"""

import pytest

from storefront.application.catalog_ledger import CatalogLedger
from storefront.application.dto import OrderItemSpec
from storefront.application.order_builder import OrderBuilder
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.identifiers import new_id
from storefront.domain.model.order import PENDING
from storefront.domain.model.value_objects import Money
from tests.fakes import InterceptingStore, TickingClock


def _setup() -> tuple[OrderBuilder, InterceptingStore]:
    store = InterceptingStore()
    return OrderBuilder(store, clock=TickingClock()), store


def _two_items() -> list[OrderItemSpec]:
    return [
        OrderItemSpec("p1", 2, 10.0),
        OrderItemSpec("p2", 1, 5.0),
    ]


class TestCreateOrderHappyPath:

    def test_total_and_status(self):
        builder, _ = _setup()
        order = builder.create("u1", _two_items())
        assert order.total_amount == Money.of("25.0")
        assert order.status == PENDING
        assert order.user_id == "u1"
        assert len(order.items) == 2

    def test_assigns_id(self):
        builder, _ = _setup()
        assert builder.create("u1", _two_items()).id is not None

    def test_persists_order(self):
        builder, _ = _setup()
        created = builder.create("u1", _two_items())
        assert builder.get(created.id) == created

    def test_stored_prices_are_exact(self):
        builder, _ = _setup()
        order = builder.create("u1", [OrderItemSpec("p1", 3, "0.10")])
        assert builder.get(order.id).total_amount == Money.of("0.30")

    def test_product_ids_are_not_checked(self):
        builder, _ = _setup()
        order = builder.create("u1", [OrderItemSpec("does-not-exist", 1, 1)])
        assert order.items[0].product_id == "does-not-exist"


class TestCreateOrderValidation:

    def test_no_items_rejected(self):
        builder, store = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            builder.create("u1", [])
        assert store.collection("orders").count({}) == 0

    def test_empty_user_rejected(self):
        builder, _ = _setup()
        with pytest.raises(ValidationError, match="user_id is required"):
            builder.create("", _two_items())

    def test_missing_product_id_rejected(self):
        builder, _ = _setup()
        with pytest.raises(ValidationError, match="product_id is required"):
            builder.create("u1", [OrderItemSpec("", 1, 1)])

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        builder, _ = _setup()
        with pytest.raises(ValidationError, match="Quantity must be positive"):
            builder.create("u1", [OrderItemSpec("p1", qty, 1)])

    def test_negative_price_rejected(self):
        builder, _ = _setup()
        with pytest.raises(ValidationError, match="price cannot be negative"):
            builder.create("u1", [OrderItemSpec("p1", 1, -1)])


class TestOrderIsolationFromCatalog:

    def test_creating_an_order_does_not_touch_stock(self):
        store = InterceptingStore()
        ledger = CatalogLedger(store, clock=TickingClock())
        builder = OrderBuilder(store, clock=TickingClock())
        product = ledger.create("Widget", "", "10.00", 5, "")

        builder.create("u1", [OrderItemSpec(product.id, 3, "10.00")])

        assert ledger.get(product.id).stock_quantity == 5

    def test_price_snapshot_survives_catalog_update(self):
        store = InterceptingStore()
        ledger = CatalogLedger(store, clock=TickingClock())
        builder = OrderBuilder(store, clock=TickingClock())
        product = ledger.create("Widget", "", "10.00", 5, "")

        order = builder.create("u1", [OrderItemSpec(product.id, 1, "10.00")])
        ledger.update(product.id, "Widget", "", "99.99", "")

        saved = builder.get(order.id)
        assert saved.total_amount == Money.of("10.00")
        assert saved.items[0].unit_price == Money.of("10.00")


class TestUpdateStatus:

    def test_any_transition_is_allowed(self):
        builder, _ = _setup()
        order = builder.create("u1", _two_items())
        for status in ("shipped", "pending", "cancelled", "whatever"):
            assert builder.update_status(order.id, status).status == status

    def test_total_is_never_recomputed(self):
        builder, _ = _setup()
        order = builder.create("u1", _two_items())
        updated = builder.update_status(order.id, "shipped")
        assert updated.total_amount == order.total_amount
        assert updated.items == order.items

    def test_refreshes_updated_at(self):
        builder, _ = _setup()
        order = builder.create("u1", _two_items())
        updated = builder.update_status(order.id, "shipped")
        assert updated.created_at == order.created_at
        assert updated.updated_at > order.updated_at

    def test_empty_status_rejected(self):
        builder, store = _setup()
        order = builder.create("u1", _two_items())
        with pytest.raises(ValidationError, match="status is required"):
            builder.update_status(order.id, "")
        assert store.collection("orders").updates == []

    def test_unknown_order_is_not_found(self):
        builder, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="order not found"):
            builder.update_status(new_id(), "shipped")


class TestGetOrder:

    def test_malformed_id_is_invalid_input(self):
        builder, _ = _setup()
        with pytest.raises(ValidationError, match="invalid order id"):
            builder.get("order-1")

    def test_unknown_id_is_not_found(self):
        builder, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            builder.get(new_id())


class TestListOrders:

    def _seed(self, builder: OrderBuilder, count: int, user_id: str = "u1"):
        return [builder.create(user_id, _two_items()) for _ in range(count)]

    def test_filters_by_user(self):
        builder, _ = _setup()
        self._seed(builder, 3, "u1")
        self._seed(builder, 2, "u2")
        page = builder.list("u2", page=1, limit=10)
        assert page.total == 2
        assert {o.user_id for o in page.items} == {"u2"}

    def test_empty_user_lists_everything(self):
        builder, _ = _setup()
        self._seed(builder, 3, "u1")
        self._seed(builder, 2, "u2")
        assert builder.list("", page=1, limit=10).total == 5

    def test_newest_first(self):
        builder, _ = _setup()
        created = self._seed(builder, 4)
        page = builder.list(None, page=1, limit=10)
        assert [o.id for o in page.items] == [o.id for o in reversed(created)]

    def test_zero_page_and_limit_match_defaults(self):
        builder, _ = _setup()
        self._seed(builder, 12)
        defaults = builder.list(None, page=1, limit=10)
        normalized = builder.list(None, page=0, limit=0)
        assert [o.id for o in normalized.items] == [o.id for o in defaults.items]
        assert len(normalized.items) == 10

    def test_oversized_limit_falls_back_to_ten(self):
        builder, _ = _setup()
        self._seed(builder, 12)
        page = builder.list(None, page=1, limit=1000)
        assert page.limit == 10
        assert len(page.items) == 10
        assert page.total == 12

    def test_second_page(self):
        builder, _ = _setup()
        self._seed(builder, 12)
        page = builder.list(None, page=2, limit=10)
        assert len(page.items) == 2
