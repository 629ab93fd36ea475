"""Domain service: pagination and filtering of list queries.

Shared by every list operation so they all normalize paging the same way:
page below 1 becomes 1, a limit outside [1, 100] becomes 10, results are
newest first.

The total and the page come from two independent reads (count, then
find), so under concurrent writes the total may disagree with the page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from storefront.domain.repository.document_store import (
    DESCENDING,
    Document,
    DocumentCollection,
    Filter,
)

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

SORT_NEWEST_FIRST = (("created_at", DESCENDING),)


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @staticmethod
    def normalize(page: int | None, limit: int | None) -> PageRequest:
        if page is None or page < 1:
            page = DEFAULT_PAGE
        if limit is None or limit < 1 or limit > MAX_LIMIT:
            limit = DEFAULT_LIMIT
        return PageRequest(page=page, limit=limit)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int


def equality_filter(field: str, value: str | None) -> Filter:
    """Filter on *field* only when *value* is non-empty."""
    return {field: value} if value else {}


def fetch_page(
    collection: DocumentCollection,
    filter: Filter,
    request: PageRequest,
    decode: Callable[[Document], T],
) -> Page[T]:
    total = collection.count(filter)
    documents = collection.find_many(
        filter,
        sort=SORT_NEWEST_FIRST,
        skip=request.skip,
        limit=request.limit,
    )
    return Page(
        items=[decode(doc) for doc in documents],
        total=total,
        page=request.page,
        limit=request.limit,
    )
