"""Abstract document store (the persistence port).

Defined in the domain layer so components never depend on infrastructure.
Concrete implementations (JSON file, in-memory) live in the infrastructure
layer and are injected into each component through its constructor.

Filters are equality-only mappings of field name to value. Every document
carries its store-assigned identifier under ``ID_FIELD``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

ID_FIELD = "_id"

ASCENDING = 1
DESCENDING = -1

Document = dict[str, Any]
Filter = Mapping[str, Any]
Sort = Sequence[tuple[str, int]]


@dataclass(frozen=True)
class DocumentUpdate:
    """A single atomic modification: assign ``set`` fields, add ``inc`` deltas."""

    set: Mapping[str, Any] = field(default_factory=dict)
    inc: Mapping[str, int] = field(default_factory=dict)


class DocumentCollection(ABC):

    @abstractmethod
    def insert(self, document: Document) -> str:
        """Store a copy of *document* under a new identifier and return it."""

    @abstractmethod
    def find_one(self, filter: Filter) -> Document | None:
        """Return the first matching document, or None."""

    @abstractmethod
    def find_many(
        self,
        filter: Filter,
        sort: Sort = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        """Return matching documents in *sort* order, windowed by skip/limit."""

    @abstractmethod
    def count(self, filter: Filter) -> int:
        """Return the number of matching documents."""

    @abstractmethod
    def find_one_and_update(
        self,
        filter: Filter,
        update: DocumentUpdate,
        return_after: bool = True,
    ) -> Document | None:
        """Atomically apply *update* to the first match.

        Returns the document as it is after the update (or before it, when
        ``return_after`` is False), or None when nothing matched. No other
        write to the same document interleaves with this call.
        """

    @abstractmethod
    def delete_one(self, filter: Filter) -> int:
        """Delete the first match and return the number deleted (0 or 1)."""


class DocumentStore(ABC):

    @abstractmethod
    def collection(self, name: str) -> DocumentCollection:
        """Return the named collection, creating it on first use."""
