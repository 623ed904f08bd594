"""
Exceptions raised by the storage and service layers.

Endpoints translate these into HTTP responses; nothing in this module
knows about HTTP.
"""


class BudgetTrackerError(Exception):
    """Base class for all application errors."""


class TransactionNotFoundError(BudgetTrackerError):
    """No transaction exists with the requested id."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"Transaction {transaction_id!r} not found")
        self.transaction_id = transaction_id


class StorageError(BudgetTrackerError):
    """An unexpected fault while talking to the document store."""
