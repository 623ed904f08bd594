"""Pydantic schema for the per-category summary."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CategorySummary(BaseModel):
    """Totals of all transactions sharing one ``category`` value.

    ``category`` is ``None`` for the group of transactions stored
    without a category.
    """

    model_config = ConfigDict(populate_by_name=True)

    category: Any = None
    total_deposits: float = Field(0, alias="totalDeposits")
    total_withdrawals: float = Field(0, alias="totalWithdrawals")
    count: int = 0
