"""
MongoDB integration for the transactions collection.

This module provides the ``TransactionStore`` (durable keyed storage of
transaction documents with secondary indexes on ``date`` and
``category``), ``open_store`` which connects to the server once at
application start, and a helper dependency for FastAPI routes.

The store never holds a module level connection.  The collection it
works on is handed to it at construction time, so tests can pass an
in-memory collection and the application passes the one obtained from
the process wide ``MongoClient``.

All driver errors are re-raised as ``StorageError``; callers never see
``pymongo`` exceptions.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from bson import ObjectId
from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .config import Settings
from .exceptions import StorageError, TransactionNotFoundError

logger = logging.getLogger(__name__)

# Fields owned by the store.  They are assigned on insert and never
# taken from client input.
PROTECTED_FIELDS = frozenset({"_id", "id", "createdAt"})


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Translate driver exceptions raised inside the block into ``StorageError``."""
    try:
        yield
    except PyMongoError as exc:
        raise StorageError(f"Failed to {action}") from exc


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Return ``value`` as an ``ObjectId`` or ``None`` if it cannot be one."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def mask_url(url: str) -> str:
    """Hide the password of a connection string before it is logged."""
    parts = urlsplit(url)
    if "@" not in parts.netloc:
        return url
    userinfo, _, hostinfo = parts.netloc.rpartition("@")
    user = userinfo.split(":", 1)[0]
    return urlunsplit(parts._replace(netloc=f"{user}:***@{hostinfo}"))


class TransactionStore:
    """Keyed storage of transaction documents in a single collection."""

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    @property
    def collection(self) -> Collection:
        return self._collection

    def ensure_indexes(self) -> None:
        """Create the ``date`` and ``category`` indexes if they do not exist."""
        with storage_errors("create indexes"):
            self._collection.create_index([("date", ASCENDING)])
            self._collection.create_index([("category", ASCENDING)])

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Persist ``record`` and return the stored document.

        A fresh ``_id`` and the ``createdAt`` timestamp are assigned
        here; any values the caller supplied for them are discarded.
        """
        document = {k: v for k, v in record.items() if k not in PROTECTED_FIELDS}
        document["createdAt"] = datetime.now(timezone.utc)
        with storage_errors("insert transaction"):
            result = self._collection.insert_one(document)
            stored = self._collection.find_one({"_id": result.inserted_id})
        # A concurrent delete may already have removed it.
        return stored if stored is not None else document

    def get_all(self) -> List[Dict[str, Any]]:
        """Return every document in insertion order."""
        with storage_errors("fetch transactions"):
            return list(self._collection.find({}))

    def replace(self, transaction_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Overwrite all fields of a document except ``_id`` and ``createdAt``.

        Raises ``TransactionNotFoundError`` when no document has the id.
        Concurrent replacements of the same document are last-write-wins.
        """
        oid = to_object_id(transaction_id)
        if oid is None:
            raise TransactionNotFoundError(transaction_id)
        document = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        with storage_errors("update transaction"):
            current = self._collection.find_one({"_id": oid}, {"createdAt": 1})
            if current is None:
                raise TransactionNotFoundError(transaction_id)
            if "createdAt" in current:
                document["createdAt"] = current["createdAt"]
            result = self._collection.replace_one({"_id": oid}, document)
            if result.matched_count == 0:
                raise TransactionNotFoundError(transaction_id)
            stored = self._collection.find_one({"_id": oid})
        if stored is None:
            raise TransactionNotFoundError(transaction_id)
        return stored

    def delete_one(self, transaction_id: str) -> None:
        oid = to_object_id(transaction_id)
        if oid is None:
            raise TransactionNotFoundError(transaction_id)
        with storage_errors("delete transaction"):
            result = self._collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise TransactionNotFoundError(transaction_id)

    def delete_many(self, transaction_ids: Iterable[str]) -> int:
        """Delete every document whose id is in ``transaction_ids``.

        Ids that are malformed or not present are skipped silently.  The
        deletion is not atomic across the set.  Returns the number of
        documents actually removed.
        """
        object_ids = {to_object_id(transaction_id) for transaction_id in transaction_ids}
        object_ids.discard(None)
        if not object_ids:
            return 0
        with storage_errors("delete transactions"):
            result = self._collection.delete_many({"_id": {"$in": list(object_ids)}})
        return result.deleted_count

    def summarize_by_category(self) -> List[Dict[str, Any]]:
        """Group the live collection by ``category`` and total the amounts.

        Documents without a category fall into a single group whose
        ``category`` is ``None``.
        """
        pipeline = [
            {
                "$group": {
                    "_id": "$category",
                    "totalDeposits": {"$sum": "$deposits"},
                    "totalWithdrawals": {"$sum": "$withdrawals"},
                    "count": {"$sum": 1},
                }
            },
            {
                "$project": {
                    "_id": 0,
                    "category": "$_id",
                    "totalDeposits": 1,
                    "totalWithdrawals": 1,
                    "count": 1,
                }
            },
        ]
        with storage_errors("generate summary"):
            return list(self._collection.aggregate(pipeline))


def open_store(settings: Settings) -> Tuple[MongoClient, TransactionStore]:
    """Connect to MongoDB and return the client together with a ready store.

    The connection is verified with a ``ping`` and the indexes are
    ensured.  Any failure is raised as ``StorageError``; there is no
    retry.
    """
    logger.info("Using MongoDB URL: %s", mask_url(settings.mongo_url))
    try:
        # Timestamps are written in UTC and must come back with their offset.
        client = MongoClient(
            settings.mongo_url,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            tz_aware=True,
            tzinfo=timezone.utc,
        )
        client.admin.command("ping")
    except PyMongoError as exc:
        raise StorageError("Failed to connect to MongoDB") from exc
    store = TransactionStore(client[settings.mongo_db_name][settings.mongo_collection])
    try:
        store.ensure_indexes()
    except StorageError:
        client.close()
        raise
    logger.info("Connected to MongoDB successfully")
    return client, store


def get_store(request: Request) -> TransactionStore:
    """FastAPI dependency returning the store created at startup."""
    return request.app.state.store
