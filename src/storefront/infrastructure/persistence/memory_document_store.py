"""In-memory implementation of DocumentStore.

Keeps every collection in a dict, hands out deep copies so callers can
never mutate stored state, and serializes all operations on one lock so
``find_one_and_update`` is atomic across threads.
"""

from __future__ import annotations

import copy
import threading

from storefront.domain.model.identifiers import new_id
from storefront.domain.repository.document_store import (
    ID_FIELD,
    Document,
    DocumentCollection,
    DocumentStore,
    DocumentUpdate,
    Filter,
    Sort,
)
from storefront.infrastructure.persistence.query import (
    apply_update,
    matches,
    sort_documents,
    window,
)


class InMemoryCollection(DocumentCollection):

    def __init__(self, lock: threading.RLock) -> None:
        self._lock = lock
        self._documents: dict[str, Document] = {}

    # --- DocumentCollection interface -----------------------------------------

    def insert(self, document: Document) -> str:
        with self._lock:
            doc_id = new_id()
            stored = copy.deepcopy(document)
            stored[ID_FIELD] = doc_id
            self._documents[doc_id] = stored
            return doc_id

    def find_one(self, filter: Filter) -> Document | None:
        with self._lock:
            found = self._first(filter)
            return copy.deepcopy(found) if found is not None else None

    def find_many(
        self,
        filter: Filter,
        sort: Sort = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        with self._lock:
            selected = [doc for doc in self._documents.values() if matches(doc, filter)]
            ordered = sort_documents(selected, sort)
            return copy.deepcopy(window(ordered, skip, limit))

    def count(self, filter: Filter) -> int:
        with self._lock:
            return sum(1 for doc in self._documents.values() if matches(doc, filter))

    def find_one_and_update(
        self,
        filter: Filter,
        update: DocumentUpdate,
        return_after: bool = True,
    ) -> Document | None:
        with self._lock:
            found = self._first(filter)
            if found is None:
                return None
            before = copy.deepcopy(found)
            apply_update(found, update)
            return copy.deepcopy(found) if return_after else before

    def delete_one(self, filter: Filter) -> int:
        with self._lock:
            found = self._first(filter)
            if found is None:
                return 0
            del self._documents[found[ID_FIELD]]
            return 1

    # --- Internal helpers -----------------------------------------------------

    def _first(self, filter: Filter) -> Document | None:
        if ID_FIELD in filter:
            doc = self._documents.get(filter[ID_FIELD])
            return doc if doc is not None and matches(doc, filter) else None
        for doc in self._documents.values():
            if matches(doc, filter):
                return doc
        return None


class InMemoryDocumentStore(DocumentStore):

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._collections: dict[str, InMemoryCollection] = {}

    def collection(self, name: str) -> InMemoryCollection:
        with self._lock:
            if name not in self._collections:
                self._collections[name] = InMemoryCollection(self._lock)
            return self._collections[name]
