"""JSON-file-backed implementation of DocumentStore.

One file per collection (``<data_dir>/<name>.json``) holding a JSON array
of documents. Each operation reads the file, works on the records and, for
writes, rewrites the file. A store-wide lock makes every operation atomic
with respect to other threads using the same store instance; separate
processes sharing a data directory are not coordinated.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path

from storefront.domain.exceptions import PersistenceError
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


class JsonCollection(DocumentCollection):

    def __init__(self, file_path: Path, lock: threading.RLock) -> None:
        self._file_path = file_path
        self._lock = lock
        self._ensure_file()

    # --- DocumentCollection interface -----------------------------------------

    def insert(self, document: Document) -> str:
        with self._lock:
            records = self._load_raw()
            doc_id = new_id()
            records.append({**document, ID_FIELD: doc_id})
            self._persist_raw(records)
            return doc_id

    def find_one(self, filter: Filter) -> Document | None:
        with self._lock:
            for raw in self._load_raw():
                if matches(raw, filter):
                    return raw
            return None

    def find_many(
        self,
        filter: Filter,
        sort: Sort = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        with self._lock:
            selected = [raw for raw in self._load_raw() if matches(raw, filter)]
            return window(sort_documents(selected, sort), skip, limit)

    def count(self, filter: Filter) -> int:
        with self._lock:
            return sum(1 for raw in self._load_raw() if matches(raw, filter))

    def find_one_and_update(
        self,
        filter: Filter,
        update: DocumentUpdate,
        return_after: bool = True,
    ) -> Document | None:
        with self._lock:
            records = self._load_raw()
            for raw in records:
                if matches(raw, filter):
                    before = dict(raw)
                    apply_update(raw, update)
                    self._persist_raw(records)
                    return raw if return_after else before
            return None

    def delete_one(self, filter: Filter) -> int:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if matches(raw, filter):
                    del records[i]
                    self._persist_raw(records)
                    return 1
            return 0

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[Document]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"failed to read {self._file_path}: {exc}") from exc
        if not isinstance(records, list):
            raise PersistenceError(f"{self._file_path} does not hold a JSON array")
        return records

    def _persist_raw(self, records: list[Document]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"failed to write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
            except OSError as exc:
                raise PersistenceError(f"failed to create {self._file_path}: {exc}") from exc


class JsonDocumentStore(DocumentStore):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._lock = threading.RLock()
        self._collections: dict[str, JsonCollection] = {}

    def collection(self, name: str) -> JsonCollection:
        with self._lock:
            if name not in self._collections:
                self._collections[name] = JsonCollection(
                    self._data_dir / f"{name}.json", self._lock
                )
            return self._collections[name]
