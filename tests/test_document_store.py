"""Tests for the document store backends.

Every test in this module runs against both the in-memory store and the
SQLAlchemy store on an in-memory SQLite database.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.infrastructure.document_store.base import NOT_FOUND, StoreError
from app.infrastructure.document_store.sql_store import SqlDocumentStore


class TestDocumentStore:
    def test_add_then_get(self, store):
        doc_id = store.add("branches", {"name": "Main", "phone": "123-456-7890"})

        snapshot = store.get("branches", doc_id)

        assert snapshot is not None
        assert snapshot.id == doc_id
        assert snapshot.data == {"name": "Main", "phone": "123-456-7890"}
        assert snapshot.created_at is not None
        assert snapshot.updated_at is None

    def test_ids_are_unique(self, store):
        first = store.add("branches", {"name": "A"})
        second = store.add("branches", {"name": "B"})

        assert first != second

    def test_get_missing_returns_none(self, store):
        assert store.get("branches", "missing") is None

    def test_collections_are_isolated(self, store):
        doc_id = store.add("branches", {"name": "Main"})

        assert store.get("employees", doc_id) is None
        assert store.list_all("employees") == []

    def test_list_all(self, store):
        store.add("branches", {"name": "A"})
        store.add("branches", {"name": "B"})

        names = sorted(snapshot.data["name"] for snapshot in store.list_all("branches"))

        assert names == ["A", "B"]

    def test_where_equal(self, store):
        store.add("employees", {"name": "Ann", "branchId": "b1"})
        store.add("employees", {"name": "Bob", "branchId": "b2"})
        store.add("employees", {"name": "Cid", "branchId": "b1"})

        matches = store.where_equal("employees", "branchId", "b1")

        assert sorted(snapshot.data["name"] for snapshot in matches) == ["Ann", "Cid"]
        assert store.where_equal("employees", "branchId", "b9") == []

    def test_where_equal_rejects_empty_field(self, store):
        with pytest.raises(StoreError) as exc_info:
            store.where_equal("employees", "", "b1")

        assert exc_info.value.code == "invalid-argument"

    def test_update_merges_and_stamps(self, store):
        doc_id = store.add("branches", {"name": "Main", "address": "123 Street"})

        snapshot = store.update("branches", doc_id, {"address": "456 Avenue"})

        assert snapshot.data == {"name": "Main", "address": "456 Avenue"}
        assert snapshot.updated_at is not None
        assert store.get("branches", doc_id).data == {"name": "Main", "address": "456 Avenue"}

    def test_update_missing_document(self, store):
        with pytest.raises(StoreError) as exc_info:
            store.update("branches", "missing", {"name": "X"})

        assert exc_info.value.code == NOT_FOUND

    def test_delete(self, store):
        doc_id = store.add("branches", {"name": "Main"})

        store.delete("branches", doc_id)

        assert store.get("branches", doc_id) is None

    def test_delete_missing_is_noop(self, store):
        store.delete("branches", "missing")

    def test_delete_where_equal(self, store):
        store.add("employees", {"name": "Ann", "branchId": "b1"})
        store.add("employees", {"name": "Bob", "branchId": "b2"})
        store.add("employees", {"name": "Cid", "branchId": "b1"})
        store.add("branches", {"name": "Main", "branchId": "b1"})

        removed = store.delete_where_equal("employees", "branchId", "b1")

        assert removed == 2
        assert [snapshot.data["name"] for snapshot in store.list_all("employees")] == ["Bob"]
        assert len(store.list_all("branches")) == 1
        assert store.delete_where_equal("employees", "branchId", "b1") == 0

    def test_returned_data_is_a_copy(self, store):
        doc_id = store.add("branches", {"name": "Main"})

        store.get("branches", doc_id).data["name"] = "Changed"

        assert store.get("branches", doc_id).data["name"] == "Main"


@pytest.mark.unit
class TestSqlErrorTranslation:
    def _store_failing_with(self, exc):
        db = MagicMock()
        db.get.side_effect = exc
        return SqlDocumentStore(db), db

    def test_integrity_error_maps_to_already_exists(self):
        store, db = self._store_failing_with(IntegrityError("INSERT", {}, Exception("duplicate key")))

        with pytest.raises(StoreError) as exc_info:
            store.get("branches", "abc")

        assert exc_info.value.code == "already-exists"
        db.rollback.assert_called_once()

    def test_operational_error_maps_to_unavailable(self):
        store, db = self._store_failing_with(OperationalError("SELECT", {}, Exception("database is locked")))

        with pytest.raises(StoreError) as exc_info:
            store.get("branches", "abc")

        assert exc_info.value.code == "unavailable"
        assert "database is locked" in exc_info.value.message
        db.rollback.assert_called_once()

    def test_failed_batch_delete_is_rolled_back(self):
        db = MagicMock()
        db.execute.side_effect = OperationalError("DELETE", {}, Exception("database is locked"))
        store = SqlDocumentStore(db)

        with pytest.raises(StoreError) as exc_info:
            store.delete_where_equal("employees", "branchId", "b1")

        assert exc_info.value.code == "unavailable"
        db.rollback.assert_called_once()
        db.commit.assert_not_called()
