"""
FastAPI dependencies — store lookup, filter parsing, error envelope.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query, Request
from fastapi.responses import JSONResponse

from expense_tracker.data.schemas import ExpenseFilter
from expense_tracker.data.store import ExpenseStore
from expense_tracker.data.validation import ValidationError


def get_store(request: Request) -> ExpenseStore:
    """The store owned by the running app (set in create_app)."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(503, "Server not initialized yet")
    return store


def parse_filter(
    category: Optional[str] = Query(None, description="Exact category match"),
    start_date: Optional[str] = Query(None, alias="startDate", description="Inclusive lower bound, e.g. 2024-01-01"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Inclusive upper bound, e.g. 2024-01-31"),
) -> ExpenseFilter:
    """Parse summary query parameters into an ExpenseFilter.

    Dates are passed through unparsed; the summary engine treats a bound it
    can't parse as matching nothing rather than failing the request.
    """
    return ExpenseFilter(category=category or None, start_date=start_date or None, end_date=end_date or None)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"status": "error", "error": exc.reason})
