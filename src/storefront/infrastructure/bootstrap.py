"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Components receive the store through their constructors; nothing holds a
global connection.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.catalog_ledger import CatalogLedger
from storefront.application.order_builder import OrderBuilder
from storefront.application.user_directory import UserDirectory
from storefront.domain.repository.document_store import DocumentStore
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_document_store import JsonDocumentStore
from storefront.infrastructure.persistence.memory_document_store import (
    InMemoryDocumentStore,
)


@dataclass(frozen=True)
class Services:
    catalog: CatalogLedger
    orders: OrderBuilder
    users: UserDirectory


def document_store(settings: Settings) -> DocumentStore:
    if settings.store_backend == "memory":
        return InMemoryDocumentStore()
    return JsonDocumentStore(settings.data_dir)


def build_services(settings: Settings | None = None, store: DocumentStore | None = None) -> Services:
    if store is None:
        store = document_store(settings or Settings.from_env())
    return Services(
        catalog=CatalogLedger(store),
        orders=OrderBuilder(store),
        users=UserDirectory(store),
    )
