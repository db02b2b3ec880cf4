from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generic, Iterator, TypeVar

from fastapi import status
from pydantic import BaseModel

from app.exceptions.exceptions import RepositoryError
from app.infrastructure.document_store.base import DocumentSnapshot, DocumentStore, StoreError

EntityT = TypeVar("EntityT", bound=BaseModel)

# Keys owned by the store; never written into document data.
SERVER_MANAGED_FIELDS = frozenset({"id", "createdAt", "updatedAt"})


def normalize_timestamp(value: Any) -> datetime | None:
    """Convert a store timestamp into an aware UTC datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value.astimezone(timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        return normalize_timestamp(datetime.fromisoformat(value.replace("Z", "+00:00")))
    to_datetime = getattr(value, "to_datetime", None)
    if callable(to_datetime):
        return normalize_timestamp(to_datetime())
    raise TypeError(f"Unsupported timestamp value: {value!r}")


class DocumentRepo(Generic[EntityT]):
    """Persistence boundary for one entity type stored in one collection."""

    entity_model: type[EntityT]
    entity_label: str
    default_collection: str

    def __init__(self, store: DocumentStore, collection: str | None = None):
        self.store = store
        self.collection = collection or self.default_collection

    @contextmanager
    def _store_call(self, context: str) -> Iterator[None]:
        try:
            yield
        except StoreError as exc:
            raise RepositoryError.from_store_error(exc, context) from exc

    def _to_entity(self, snapshot: DocumentSnapshot, model: type[BaseModel] | None = None):
        model = model or self.entity_model
        data = {key: value for key, value in snapshot.data.items() if key not in SERVER_MANAGED_FIELDS}
        return model.model_validate(
            {
                **data,
                "id": snapshot.id,
                "createdAt": normalize_timestamp(snapshot.created_at),
                "updatedAt": normalize_timestamp(snapshot.updated_at),
            }
        )

    @staticmethod
    def _to_document(payload: BaseModel) -> dict[str, Any]:
        data = payload.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return {key: value for key, value in data.items() if key not in SERVER_MANAGED_FIELDS}

    def create(self, payload: BaseModel) -> str:
        with self._store_call(f"Failed to create {self.entity_label}"):
            return self.store.add(self.collection, self._to_document(payload))

    def get_by_id(self, entity_id: str) -> EntityT | None:
        with self._store_call(f"Failed to get {self.entity_label} by ID ({entity_id})"):
            snapshot = self.store.get(self.collection, entity_id)
        return self._to_entity(snapshot) if snapshot else None

    def get_all(self) -> list[EntityT]:
        with self._store_call(f"Failed to fetch all {self.entity_label}s"):
            snapshots = self.store.list_all(self.collection)
        return [self._to_entity(snapshot) for snapshot in snapshots]

    def update(self, entity_id: str, payload: BaseModel) -> datetime | None:
        """Merge the fields set on `payload` into the stored entity; return the update stamp."""
        with self._store_call(f"Failed to update {self.entity_label} ({entity_id})"):
            snapshot = self.store.update(self.collection, entity_id, self._to_document(payload))
        return normalize_timestamp(snapshot.updated_at)

    def delete(self, entity_id: str) -> None:
        with self._store_call(f"Failed to delete {self.entity_label} ({entity_id})"):
            self.store.delete(self.collection, entity_id)

    def get_by_field(self, field_name: str, value: Any) -> list[EntityT]:
        return self._query(self.collection, field_name, value, self.entity_model)

    def _query(self, collection: str, field_name: str, value: Any, model: type[BaseModel]) -> list:
        if field_name in SERVER_MANAGED_FIELDS:
            raise RepositoryError(
                f'Field "{field_name}" is managed by the store and cannot be queried',
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        with self._store_call(f"Failed to fetch {collection} by {field_name} ({value})"):
            snapshots = self.store.where_equal(collection, field_name, value)
        return [self._to_entity(snapshot, model) for snapshot in snapshots]
