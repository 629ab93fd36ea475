"""Application service: Catalog Ledger.

Owns product records and the rule that stock never stays negative.

Stock adjustments go through one atomic increment on the store. The store
has no "increment only if the result stays non-negative" primitive, so the
ledger checks the post-image and, when the count went below zero, issues a
compensating increment of the opposite sign before reporting
InsufficientStockError. Between those two writes another adjustment on the
same product can observe the negative value; that window is accepted.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    PersistenceError,
    ValidationError,
)
from storefront.domain.model import timestamps
from storefront.domain.model.identifiers import parse_id
from storefront.domain.model.product import Product, ProductDetails
from storefront.domain.model.timestamps import Clock
from storefront.domain.model.value_objects import Money
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

COLLECTION = "products"


class CatalogLedger:

    def __init__(self, store: DocumentStore, clock: Clock = timestamps.utcnow) -> None:
        self._products = store.collection(COLLECTION)
        self._clock = clock

    def create(
        self,
        name: str,
        description: str,
        price: str | float | int | Decimal,
        stock_quantity: int,
        category: str,
    ) -> Product:
        details = ProductDetails.of(name, description, price, category)
        product = Product.create(details, stock_quantity, now=self._clock())

        product.id = self._products.insert(self._to_document(product))
        logger.info("Product created", product_id=product.id, name=product.name)
        return product

    def get(self, product_id: str) -> Product:
        product_id = parse_id(product_id, "product")
        raw = self._products.find_one({ID_FIELD: product_id})
        if raw is None:
            raise EntityNotFoundError("product not found")
        return self._to_domain(raw)

    def update(
        self,
        product_id: str,
        name: str,
        description: str,
        price: str | float | int | Decimal,
        category: str,
    ) -> Product:
        """Replace the descriptive fields of a product.

        Stock is deliberately not part of this path; use ``adjust_stock``.
        """
        product_id = parse_id(product_id, "product")
        details = ProductDetails.of(name, description, price, category)

        raw = self._products.find_one_and_update(
            {ID_FIELD: product_id},
            DocumentUpdate(
                set={
                    "name": details.name,
                    "description": details.description,
                    "price": str(details.price.amount),
                    "category": details.category,
                    "updated_at": timestamps.to_storage(self._clock()),
                }
            ),
        )
        if raw is None:
            raise EntityNotFoundError("product not found")
        return self._to_domain(raw)

    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """Add *delta* to the stock count (negative consumes stock).

        Raises InsufficientStockError, after restoring the previous count,
        when the result would be negative.
        """
        product_id = parse_id(product_id, "product")
        if not isinstance(delta, int) or isinstance(delta, bool):
            raise ValidationError("stock change must be an integer")

        raw = self._products.find_one_and_update(
            {ID_FIELD: product_id},
            DocumentUpdate(
                inc={"stock_quantity": delta},
                set={"updated_at": timestamps.to_storage(self._clock())},
            ),
        )
        if raw is None:
            raise EntityNotFoundError("product not found")

        product = self._to_domain(raw)
        if product.stock_quantity < 0:
            self._compensate(product_id, delta)
            raise InsufficientStockError("insufficient stock")
        return product

    def list(self, category: str | None, page: int | None, limit: int | None) -> Page[Product]:
        return fetch_page(
            self._products,
            equality_filter("category", category),
            PageRequest.normalize(page, limit),
            self._to_domain,
        )

    # --- Internal helpers -----------------------------------------------------

    def _compensate(self, product_id: str, delta: int) -> None:
        logger.warning(
            "Stock adjustment would go negative, reverting",
            product_id=product_id,
            delta=delta,
        )
        try:
            restored = self._products.find_one_and_update(
                {ID_FIELD: product_id},
                DocumentUpdate(inc={"stock_quantity": -delta}),
            )
        except PersistenceError:
            logger.error("Stock compensation failed", product_id=product_id, delta=delta)
            raise
        if restored is None:
            logger.error("Product vanished before compensation", product_id=product_id)
            raise PersistenceError(f"product {product_id} disappeared during stock compensation")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_document(product: Product) -> Document:
        return {
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "stock_quantity": product.stock_quantity,
            "category": product.category,
            "created_at": timestamps.to_storage(product.created_at),
            "updated_at": timestamps.to_storage(product.updated_at),
        }

    @staticmethod
    def _to_domain(raw: Document) -> Product:
        try:
            return Product(
                id=raw[ID_FIELD],
                name=raw["name"],
                description=raw.get("description", ""),
                price=Money(Decimal(raw["price"])),
                stock_quantity=int(raw["stock_quantity"]),
                category=raw.get("category", ""),
                created_at=timestamps.from_storage(raw["created_at"]),
                updated_at=timestamps.from_storage(raw["updated_at"]),
            )
        except (KeyError, TypeError, ArithmeticError, ValueError, ValidationError) as exc:
            raise PersistenceError(f"failed to decode product: {exc}") from exc
