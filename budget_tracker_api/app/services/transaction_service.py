"""
Service layer for transaction records.

The service normalizes client payloads before handing them to the
``TransactionStore``:

* ``deposits`` and ``withdrawals`` are coerced to numbers with
  ``coerce_amount``.  A value that cannot be parsed is stored as ``0``;
  this is never reported as an error.
* Client supplied ``_id``/``id``/``createdAt`` values are dropped, so
  the id in the URL is the only one that counts and ``createdAt`` stays
  whatever the store assigned on insert.

Errors from the store (``TransactionNotFoundError``, ``StorageError``)
are passed through unchanged for the API layer to translate.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from budget_tracker_api.app.core.coercion import coerce_amount
from budget_tracker_api.app.core.db import PROTECTED_FIELDS, TransactionStore
from budget_tracker_api.app.schemas.transaction import TransactionIn, TransactionRead

logger = logging.getLogger(__name__)

AMOUNT_FIELDS = ("deposits", "withdrawals")


def normalize_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``payload`` ready to be stored."""
    document = {k: v for k, v in payload.items() if k not in PROTECTED_FIELDS}
    for name in AMOUNT_FIELDS:
        document[name] = coerce_amount(payload.get(name))
    return document


class TransactionService:
    """CRUD operations on transactions backed by a ``TransactionStore``."""

    def __init__(self, store: TransactionStore) -> None:
        self.store = store

    def list_transactions(self) -> List[TransactionRead]:
        return [TransactionRead.model_validate(doc) for doc in self.store.get_all()]

    def create_transaction(self, data: TransactionIn) -> TransactionRead:
        """Insert a new transaction and return the stored record."""
        document = normalize_payload(data.model_dump(exclude_unset=True))
        stored = self.store.insert(document)
        logger.info("Created transaction %s", stored["_id"])
        return TransactionRead.model_validate(stored)

    def update_transaction(self, transaction_id: str, data: TransactionIn) -> TransactionRead:
        """Replace every field of an existing transaction.

        Fields missing from ``data`` are removed from the stored record,
        except ``_id`` and ``createdAt`` which never change.  Raises
        ``TransactionNotFoundError`` if the id is unknown.
        """
        document = normalize_payload(data.model_dump(exclude_unset=True))
        stored = self.store.replace(transaction_id, document)
        logger.info("Updated transaction %s", transaction_id)
        return TransactionRead.model_validate(stored)

    def delete_transaction(self, transaction_id: str) -> None:
        self.store.delete_one(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    def delete_transactions(self, transaction_ids: Iterable[str]) -> int:
        """Delete all listed transactions and return how many were removed.

        Unknown ids are ignored.
        """
        deleted = self.store.delete_many(transaction_ids)
        logger.info("Deleted %s transactions", deleted)
        return deleted
