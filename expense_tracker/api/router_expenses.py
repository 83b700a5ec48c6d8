"""
Expense endpoints: intake, filtered summary, analysis, Excel export.

Rejected expenses raise ValidationError, turned into a 400 error envelope by
the handler registered in create_app.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from expense_tracker.analytics.summary import analyze, summarize
from expense_tracker.data.schemas import ExpenseFilter
from expense_tracker.data.store import ExpenseStore
from expense_tracker.api.dependencies import get_store, parse_filter
from expense_tracker.api.response_models import (
    AnalysisResponse, ErrorResponse, ExpenseIn, ExpenseResponse, SummaryResponse,
)
from expense_tracker.reports import expense_report

router = APIRouter(tags=["expenses"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get(
    "/add-expense",
    status_code=201,
    response_model=ExpenseResponse,
    responses={400: {"model": ErrorResponse}},
)
def add_expense_from_query(
    category: Optional[str] = Query(None),
    amount: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    store: ExpenseStore = Depends(get_store),
):
    """Add an expense from query parameters (browser-friendly)."""
    record = store.add({"category": category, "amount": amount, "date": date})
    return ExpenseResponse(data=record.to_dict())


@router.post(
    "/expenses",
    status_code=201,
    response_model=ExpenseResponse,
    responses={400: {"model": ErrorResponse}},
)
def add_expense(payload: Optional[ExpenseIn] = None, store: ExpenseStore = Depends(get_store)):
    """Add an expense from a JSON body."""
    payload = payload or ExpenseIn()
    record = store.add(payload.model_dump())
    return ExpenseResponse(data=record.to_dict())


@router.get("/expenses", response_model=SummaryResponse)
def list_expenses(
    store: ExpenseStore = Depends(get_store),
    flt: ExpenseFilter = Depends(parse_filter),
):
    """Matching expenses and their total, in the order they were added."""
    return SummaryResponse(data=summarize(store, flt).to_dict())


@router.get("/expenses/analysis", response_model=AnalysisResponse)
def expense_analysis(store: ExpenseStore = Depends(get_store)):
    """Totals per category and per calendar month."""
    return AnalysisResponse(data=analyze(store).to_dict())


@router.get("/expenses/export")
def export_expenses(
    store: ExpenseStore = Depends(get_store),
    flt: ExpenseFilter = Depends(parse_filter),
):
    """Download the filtered summary and analysis as an Excel workbook."""
    content = expense_report.generate_excel(store, flt)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=Expense_Report.xlsx"},
    )
