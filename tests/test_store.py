"""
Tests for the MongoDB transaction store
"""

import pytest
from bson import ObjectId

from budget_tracker_api.app.core.db import TransactionStore, mask_url, to_object_id
from budget_tracker_api.app.core.exceptions import StorageError, TransactionNotFoundError

from .conftest import UnavailableCollection


def make_record(**overrides):
    record = {"date": "2024-03-01", "category": "food", "deposits": 0.0, "withdrawals": 12.5}
    record.update(overrides)
    return record


class TestInsertAndFetch:
    """Insert assigns identity and timestamps"""

    def test_insert_assigns_unique_ids(self, store):
        ids = {store.insert(make_record())["_id"] for _ in range(25)}
        assert len(ids) == 25
        assert all(isinstance(oid, ObjectId) for oid in ids)

    def test_insert_sets_created_at(self, store):
        stored = store.insert(make_record())
        assert stored["createdAt"] is not None

    def test_insert_ignores_client_identity(self, store):
        forged = ObjectId()
        stored = store.insert(make_record(_id=forged, createdAt="1999-01-01"))
        assert stored["_id"] != forged
        assert stored["createdAt"] != "1999-01-01"

    def test_get_all_returns_every_record(self, store):
        first = store.insert(make_record(category="food"))
        second = store.insert(make_record(category="rent"))
        ids = [doc["_id"] for doc in store.get_all()]
        assert ids == [first["_id"], second["_id"]]

    def test_get_all_on_empty_collection(self, store):
        assert store.get_all() == []

    def test_ensure_indexes_creates_date_and_category(self, store, collection):
        store.ensure_indexes()
        keys = [index["key"] for index in collection.index_information().values()]
        assert [("date", 1)] in keys
        assert [("category", 1)] in keys


class TestReplace:
    """Full replacement keeps id and creation time"""

    def test_replace_overwrites_fields(self, store):
        stored = store.insert(make_record(note="old"))
        updated = store.replace(str(stored["_id"]), {"category": "rent", "deposits": 0.0, "withdrawals": 900.0})
        assert updated["category"] == "rent"
        assert updated["withdrawals"] == 900.0
        assert "note" not in updated
        assert "date" not in updated

    def test_replace_preserves_id_and_created_at(self, store):
        stored = store.insert(make_record())
        updated = store.replace(
            str(stored["_id"]),
            {"_id": ObjectId(), "createdAt": "2000-01-01", "category": "misc"},
        )
        assert updated["_id"] == stored["_id"]
        assert updated["createdAt"] == stored["createdAt"]

    def test_replace_unknown_id_raises_and_leaves_store_unchanged(self, store):
        store.insert(make_record())
        before = store.get_all()
        with pytest.raises(TransactionNotFoundError):
            store.replace(str(ObjectId()), {"category": "x"})
        assert store.get_all() == before

    def test_replace_malformed_id_is_not_found(self, store):
        with pytest.raises(TransactionNotFoundError):
            store.replace("not-an-object-id", {"category": "x"})


class TestDelete:
    """Single and bulk deletion"""

    def test_delete_one_removes_record(self, store):
        stored = store.insert(make_record())
        store.delete_one(str(stored["_id"]))
        assert store.get_all() == []

    def test_delete_one_twice(self, store):
        stored = store.insert(make_record())
        store.delete_one(str(stored["_id"]))
        with pytest.raises(TransactionNotFoundError):
            store.delete_one(str(stored["_id"]))

    def test_delete_one_malformed_id_is_not_found(self, store):
        with pytest.raises(TransactionNotFoundError):
            store.delete_one("xyz")

    def test_delete_many_skips_unknown_ids(self, store):
        kept = store.insert(make_record(category="keep"))
        doomed = [store.insert(make_record()) for _ in range(3)]
        ids = [str(doc["_id"]) for doc in doomed] + [str(ObjectId()), "garbage"]
        assert store.delete_many(ids) == 3
        assert [doc["_id"] for doc in store.get_all()] == [kept["_id"]]

    def test_delete_many_counts_duplicates_once(self, store):
        stored = store.insert(make_record())
        assert store.delete_many([str(stored["_id"]), str(stored["_id"])]) == 1

    def test_delete_many_with_nothing_to_delete(self, store):
        assert store.delete_many([]) == 0
        assert store.delete_many(["nope"]) == 0


class TestStorageFailures:
    """Driver errors surface as StorageError"""

    def test_driver_errors_are_translated(self):
        store = TransactionStore(UnavailableCollection())
        with pytest.raises(StorageError):
            store.get_all()
        with pytest.raises(StorageError):
            store.insert(make_record())
        with pytest.raises(StorageError):
            store.summarize_by_category()
        with pytest.raises(StorageError):
            store.delete_many([str(ObjectId())])

    def test_original_error_is_chained(self):
        store = TransactionStore(UnavailableCollection())
        with pytest.raises(StorageError) as excinfo:
            store.delete_one(str(ObjectId()))
        assert excinfo.value.__cause__ is not None


class TestHelpers:
    def test_to_object_id(self):
        oid = ObjectId()
        assert to_object_id(oid) is oid
        assert to_object_id(str(oid)) == oid
        assert to_object_id("123") is None
        assert to_object_id(None) is None

    def test_mask_url_hides_password(self):
        assert mask_url("mongodb://admin:s3cret@db:27017/x") == "mongodb://admin:***@db:27017/x"

    def test_mask_url_without_credentials(self):
        assert mask_url("mongodb://localhost:27017") == "mongodb://localhost:27017"
