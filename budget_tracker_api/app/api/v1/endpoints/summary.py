"""
Summary endpoint.

Returns per-category totals computed from the current contents of the
transactions collection.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from budget_tracker_api.app.core.db import TransactionStore, get_store
from budget_tracker_api.app.core.exceptions import StorageError
from budget_tracker_api.app.schemas.summary import CategorySummary
from budget_tracker_api.app.services.summary_service import SummaryService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[CategorySummary])
def get_summary(store: TransactionStore = Depends(get_store)) -> List[CategorySummary]:
    """Return ``{category, totalDeposits, totalWithdrawals, count}`` per category."""
    try:
        return SummaryService(store).summary()
    except StorageError:
        logger.exception("Error generating summary")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate summary",
        )
