from __future__ import annotations

import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Mapping

from app.infrastructure.document_store.base import (
    NOT_FOUND,
    DocumentSnapshot,
    DocumentStore,
    StoreError,
    require_field_path,
)


class InMemoryDocumentStore(DocumentStore):
    """Process-local document store. All state lives on the instance."""

    def __init__(self):
        self._collections: dict[str, dict[str, DocumentSnapshot]] = {}
        self._lock = threading.Lock()

    def _collection(self, name: str) -> dict[str, DocumentSnapshot]:
        return self._collections.setdefault(name, {})

    @staticmethod
    def _copy(snapshot: DocumentSnapshot) -> DocumentSnapshot:
        return DocumentSnapshot(
            id=snapshot.id,
            data=copy.deepcopy(snapshot.data),
            created_at=snapshot.created_at,
            updated_at=snapshot.updated_at,
        )

    def add(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        snapshot = DocumentSnapshot(
            id=doc_id,
            data=copy.deepcopy(dict(data)),
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._collection(collection)[doc_id] = snapshot
        return doc_id

    def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        with self._lock:
            snapshot = self._collection(collection).get(doc_id)
            return self._copy(snapshot) if snapshot else None

    def list_all(self, collection: str) -> list[DocumentSnapshot]:
        with self._lock:
            return [self._copy(snapshot) for snapshot in self._collection(collection).values()]

    def where_equal(self, collection: str, field: str, value: Any) -> list[DocumentSnapshot]:
        require_field_path(field)
        with self._lock:
            return [
                self._copy(snapshot)
                for snapshot in self._collection(collection).values()
                if field in snapshot.data and snapshot.data[field] == value
            ]

    def update(self, collection: str, doc_id: str, changes: Mapping[str, Any]) -> DocumentSnapshot:
        with self._lock:
            documents = self._collection(collection)
            existing = documents.get(doc_id)
            if existing is None:
                raise StoreError(NOT_FOUND, f"No document to update: {collection}/{doc_id}")
            updated = DocumentSnapshot(
                id=doc_id,
                data={**existing.data, **copy.deepcopy(dict(changes))},
                created_at=existing.created_at,
                updated_at=datetime.now(timezone.utc),
            )
            documents[doc_id] = updated
            return self._copy(updated)

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            self._collection(collection).pop(doc_id, None)

    def delete_where_equal(self, collection: str, field: str, value: Any) -> int:
        require_field_path(field)
        with self._lock:
            documents = self._collection(collection)
            matches = [
                doc_id
                for doc_id, snapshot in documents.items()
                if field in snapshot.data and snapshot.data[field] == value
            ]
            for doc_id in matches:
                del documents[doc_id]
            return len(matches)
