"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import summary, transactions

router = APIRouter()

router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
router.include_router(summary.router, prefix="/summary", tags=["summary"])
