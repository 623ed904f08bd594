"""
Service layer for the per-category summary.

The summary is recomputed from the live collection on every call; no
result is cached between requests.  A concurrent bulk delete may be
observed half way through since the store does not delete atomically.
"""

from __future__ import annotations

from typing import List

from budget_tracker_api.app.core.db import TransactionStore
from budget_tracker_api.app.schemas.summary import CategorySummary


class SummaryService:
    """Aggregated totals per category."""

    def __init__(self, store: TransactionStore) -> None:
        self.store = store

    def summary(self) -> List[CategorySummary]:
        """Return one row per distinct ``category`` value.

        Each row holds the sum of ``deposits``, the sum of
        ``withdrawals`` and the number of transactions in that
        category.  Row order is unspecified.
        """
        return [CategorySummary.model_validate(row) for row in self.store.summarize_by_category()]
