from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

# Store error codes, named after the managed document database's canonical codes.
NOT_FOUND = "not-found"
ALREADY_EXISTS = "already-exists"
PERMISSION_DENIED = "permission-denied"
UNAUTHENTICATED = "unauthenticated"
INVALID_ARGUMENT = "invalid-argument"
UNAVAILABLE = "unavailable"
INTERNAL = "internal"


class StoreError(Exception):
    """Failure raised by a document store backend, tagged with a store error code."""

    def __init__(self, code: str | int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(frozen=True)
class DocumentSnapshot:
    id: str
    data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DocumentStore(ABC):
    """Abstraction over a document database organised in named collections."""

    @abstractmethod
    def add(self, collection: str, data: Mapping[str, Any]) -> str:
        """Store a new document and return its generated id."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        """Return the document stored under `doc_id`, or None."""

    @abstractmethod
    def list_all(self, collection: str) -> list[DocumentSnapshot]:
        """Return every document of a collection."""

    @abstractmethod
    def where_equal(self, collection: str, field: str, value: Any) -> list[DocumentSnapshot]:
        """Return documents whose top-level `field` equals `value`."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, changes: Mapping[str, Any]) -> DocumentSnapshot:
        """
        Merge `changes` into an existing document and stamp its update time.
        Raises StoreError(NOT_FOUND) when the document does not exist.
        """

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is not an error."""

    @abstractmethod
    def delete_where_equal(self, collection: str, field: str, value: Any) -> int:
        """Delete every document whose top-level `field` equals `value` in one write; return the count."""


def require_field_path(field: str) -> None:
    if not isinstance(field, str) or not field.strip():
        raise StoreError(INVALID_ARGUMENT, "Field path must be a non-empty string")
