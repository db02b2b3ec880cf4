from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from sqlalchemy import delete, func, select
from sqlalchemy.exc import DataError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.infrastructure.document_store.base import (
    ALREADY_EXISTS,
    INTERNAL,
    INVALID_ARGUMENT,
    NOT_FOUND,
    UNAVAILABLE,
    DocumentSnapshot,
    DocumentStore,
    StoreError,
    require_field_path,
)
from app.models.document import Document

logger = logging.getLogger(__name__)


def _snapshot(document: Document) -> DocumentSnapshot:
    return DocumentSnapshot(
        id=document.id,
        data=dict(document.data or {}),
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def _json_equals(field: str, value: Any):
    element = Document.data[field]
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    return element.as_string() == str(value)


class SqlDocumentStore(DocumentStore):
    """Document store keeping each document as a JSON row of the `documents` table.

    Every write commits before returning, so a call either completes or raises.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _translate(self, operation: str, collection: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning(
                "Document store operation failed",
                extra={"operation": operation, "collection": collection, "error": type(exc).__name__},
            )
            raise StoreError(self._code_for(exc), str(getattr(exc, "orig", exc))) from exc

    @staticmethod
    def _code_for(exc: SQLAlchemyError) -> str:
        if isinstance(exc, IntegrityError):
            return ALREADY_EXISTS
        if isinstance(exc, DataError):
            return INVALID_ARGUMENT
        if isinstance(exc, OperationalError):
            return UNAVAILABLE
        return INTERNAL

    def add(self, collection: str, data: Mapping[str, Any]) -> str:
        document = Document(collection=collection, id=uuid.uuid4().hex, data=dict(data))
        with self._translate("add", collection):
            self.db.add(document)
            self.db.flush()
            doc_id = document.id
            self.db.commit()
        return doc_id

    def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        with self._translate("get", collection):
            document = self.db.get(Document, (collection, doc_id))
            return _snapshot(document) if document else None

    def list_all(self, collection: str) -> list[DocumentSnapshot]:
        stmt = (
            select(Document)
            .where(Document.collection == collection)
            .order_by(Document.created_at.asc(), Document.id.asc())
        )
        with self._translate("list", collection):
            return [_snapshot(document) for document in self.db.execute(stmt).scalars().all()]

    def where_equal(self, collection: str, field: str, value: Any) -> list[DocumentSnapshot]:
        require_field_path(field)
        stmt = (
            select(Document)
            .where(Document.collection == collection)
            .where(_json_equals(field, value))
            .order_by(Document.created_at.asc(), Document.id.asc())
        )
        with self._translate("query", collection):
            return [_snapshot(document) for document in self.db.execute(stmt).scalars().all()]

    def update(self, collection: str, doc_id: str, changes: Mapping[str, Any]) -> DocumentSnapshot:
        with self._translate("update", collection):
            document = self.db.get(Document, (collection, doc_id))
            if document is None:
                raise StoreError(NOT_FOUND, f"No document to update: {collection}/{doc_id}")
            # Reassign so the JSON column is flagged dirty.
            document.data = {**(document.data or {}), **dict(changes)}
            document.updated_at = func.now()
            self.db.flush()
            self.db.refresh(document)
            snapshot = _snapshot(document)
            self.db.commit()
        return snapshot

    def delete(self, collection: str, doc_id: str) -> None:
        with self._translate("delete", collection):
            document = self.db.get(Document, (collection, doc_id))
            if document is None:
                return
            self.db.delete(document)
            self.db.commit()

    def delete_where_equal(self, collection: str, field: str, value: Any) -> int:
        require_field_path(field)
        stmt = (
            delete(Document)
            .where(Document.collection == collection)
            .where(_json_equals(field, value))
            .execution_options(synchronize_session=False)
        )
        with self._translate("delete", collection):
            removed = self.db.execute(stmt).rowcount
            self.db.commit()
        return removed
