"""Filter, update and sort semantics shared by the bundled document stores."""

from __future__ import annotations

from storefront.domain.exceptions import PersistenceError
from storefront.domain.repository.document_store import (
    DESCENDING,
    Document,
    DocumentUpdate,
    Filter,
    Sort,
)


def matches(document: Document, filter: Filter) -> bool:
    return all(
        key in document and document[key] == value for key, value in filter.items()
    )


def apply_update(document: Document, update: DocumentUpdate) -> None:
    """Apply *update* to *document* in place.

    Incrementing a missing field starts from zero.
    """
    for key, delta in update.inc.items():
        current = document.get(key, 0)
        if not isinstance(current, int) or isinstance(current, bool):
            raise PersistenceError(f"cannot increment non-integer field '{key}'")
        document[key] = current + delta
    for key, value in update.set.items():
        document[key] = value


def _sort_key(value):
    # Missing values sort before present ones; never compares None to a value.
    return (value is not None, value)


def sort_documents(documents: list[Document], sort: Sort) -> list[Document]:
    result = list(documents)
    # Stable sorts applied last key first give a multi-key ordering.
    for field, direction in reversed(list(sort)):
        result.sort(key=lambda doc: _sort_key(doc.get(field)), reverse=direction == DESCENDING)
    return result


def window(documents: list[Document], skip: int, limit: int | None) -> list[Document]:
    if skip < 0:
        raise PersistenceError("skip cannot be negative")
    end = None if limit is None else skip + limit
    return documents[skip:end]
