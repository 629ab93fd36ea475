"""Test doubles for the document store and the clock.

The real in-memory store covers the happy paths; these wrappers delegate to
it and inject failures or interleavings at precise points.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from storefront.domain.exceptions import PersistenceError
from storefront.domain.repository.document_store import (
    Document,
    DocumentCollection,
    DocumentStore,
    DocumentUpdate,
    Filter,
    Sort,
)
from storefront.infrastructure.persistence.memory_document_store import (
    InMemoryDocumentStore,
)


class TickingClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self._now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self._step = step

    def __call__(self) -> datetime:
        self._now += self._step
        return self._now


class InterceptingCollection(DocumentCollection):
    """Delegates to a real collection, calling hooks around updates.

    ``fail_updates_after`` makes the n-th and later ``find_one_and_update``
    calls raise PersistenceError. ``after_update`` runs after every
    successful update with the returned document.
    """

    def __init__(self, inner: DocumentCollection) -> None:
        self.inner = inner
        self.updates: list[DocumentUpdate] = []
        self.fail_updates_after: int | None = None
        self.fail_reads = False
        self.after_update: Callable[[Document | None], None] | None = None

    def insert(self, document: Document) -> str:
        return self.inner.insert(document)

    def find_one(self, filter: Filter) -> Document | None:
        if self.fail_reads:
            raise PersistenceError("connection reset")
        return self.inner.find_one(filter)

    def find_many(
        self,
        filter: Filter,
        sort: Sort = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        if self.fail_reads:
            raise PersistenceError("connection reset")
        return self.inner.find_many(filter, sort, skip, limit)

    def count(self, filter: Filter) -> int:
        if self.fail_reads:
            raise PersistenceError("connection reset")
        return self.inner.count(filter)

    def find_one_and_update(
        self,
        filter: Filter,
        update: DocumentUpdate,
        return_after: bool = True,
    ) -> Document | None:
        self.updates.append(update)
        if self.fail_updates_after is not None and len(self.updates) >= self.fail_updates_after:
            raise PersistenceError("write concern failed")
        result = self.inner.find_one_and_update(filter, update, return_after)
        if self.after_update is not None:
            self.after_update(result)
        return result

    def delete_one(self, filter: Filter) -> int:
        return self.inner.delete_one(filter)


class InterceptingStore(DocumentStore):

    def __init__(self, inner: DocumentStore | None = None) -> None:
        self.inner = inner or InMemoryDocumentStore()
        self._collections: dict[str, InterceptingCollection] = {}

    def collection(self, name: str) -> InterceptingCollection:
        if name not in self._collections:
            self._collections[name] = InterceptingCollection(self.inner.collection(name))
        return self._collections[name]
