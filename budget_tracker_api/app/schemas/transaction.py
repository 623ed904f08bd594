"""
Pydantic schemas for transaction records.

Request bodies are deliberately permissive: apart from the numeric
coercion of ``deposits`` and ``withdrawals`` performed by the service
layer, nothing is validated, and unknown fields are stored alongside
the known ones.  Wire names follow the stored documents (``_id``,
``createdAt``) so existing front ends keep working.
"""

from datetime import datetime, timezone
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from budget_tracker_api.app.core.coercion import coerce_amount


class TransactionIn(BaseModel):
    """Schema for creating or replacing a transaction."""

    model_config = ConfigDict(extra="allow")

    date: Any = Field(None, description="Date of the transaction, stored as given")
    category: Any = Field(None, description="Free-form label used to group transactions")
    deposits: Any = Field(None, description="Amount paid in; unparsable values are stored as 0")
    withdrawals: Any = Field(None, description="Amount paid out; unparsable values are stored as 0")


class TransactionRead(BaseModel):
    """Schema for a stored transaction.

    Documents written by older deployments were not always normalized,
    so amounts are coerced on the way out as well and a ``createdAt``
    without an offset is taken to be UTC.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., alias="_id")
    date: Any = None
    category: Any = None
    deposits: float = 0
    withdrawals: float = 0
    created_at: Any = Field(None, alias="createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        return str(v)

    @field_validator("deposits", "withdrawals", mode="before")
    @classmethod
    def coerce_stored_amount(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def assume_utc(cls, v: Any) -> Any:
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class BulkDeleteRequest(BaseModel):
    """Body of ``POST /transactions/delete-multiple``."""

    ids: List[str] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str
