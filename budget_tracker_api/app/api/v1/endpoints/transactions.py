"""
Transaction endpoints.

These routes expose create, list, replace and delete operations on the
transactions collection, plus a bulk delete.  Handlers are plain
functions; FastAPI runs them in its threadpool so the blocking MongoDB
driver does not stall the event loop.

Storage failures are logged with their traceback and answered with a
500 and a short message; the underlying error is never sent to the
client.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from budget_tracker_api.app.core.db import TransactionStore, get_store
from budget_tracker_api.app.core.exceptions import StorageError, TransactionNotFoundError
from budget_tracker_api.app.schemas.transaction import (
    BulkDeleteRequest,
    MessageResponse,
    TransactionIn,
    TransactionRead,
)
from budget_tracker_api.app.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_transaction_service(store: TransactionStore = Depends(get_store)) -> TransactionService:
    return TransactionService(store)


@router.get("", response_model=List[TransactionRead])
def list_transactions(
    service: TransactionService = Depends(get_transaction_service),
) -> List[TransactionRead]:
    """Return every stored transaction."""
    try:
        return service.list_transactions()
    except StorageError:
        logger.exception("Error fetching transactions")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch transactions",
        )


@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction_in: TransactionIn,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionRead:
    """Create a transaction.

    ``deposits`` and ``withdrawals`` that are missing or not numeric are
    stored as ``0``.  The response includes the assigned ``_id`` and
    ``createdAt``.
    """
    try:
        return service.create_transaction(transaction_in)
    except StorageError:
        logger.exception("Error adding transaction")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add transaction",
        )


@router.post("/delete-multiple", response_model=MessageResponse)
def delete_transactions(
    payload: BulkDeleteRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> MessageResponse:
    """Delete all transactions whose ids are listed; unknown ids are skipped."""
    try:
        deleted = service.delete_transactions(payload.ids)
    except StorageError:
        logger.exception("Error deleting transactions")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete transactions",
        )
    return MessageResponse(message=f"{deleted} transactions deleted successfully")


@router.put("/{transaction_id}", response_model=TransactionRead)
def update_transaction(
    transaction_id: str,
    transaction_in: TransactionIn,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionRead:
    """Replace a transaction.  Any id in the body is ignored."""
    try:
        return service.update_transaction(transaction_id, transaction_in)
    except TransactionNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    except StorageError:
        logger.exception("Error updating transaction %s", transaction_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update transaction",
        )


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: str,
    service: TransactionService = Depends(get_transaction_service),
) -> MessageResponse:
    try:
        service.delete_transaction(transaction_id)
    except TransactionNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    except StorageError:
        logger.exception("Error deleting transaction %s", transaction_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete transaction",
        )
    return MessageResponse(message="Transaction deleted successfully")
