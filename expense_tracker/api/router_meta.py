"""
Meta endpoints: welcome, health, categories.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from expense_tracker.config import WELCOME_MESSAGE
from expense_tracker.data.store import ExpenseStore
from expense_tracker.api.dependencies import get_store
from expense_tracker.api.response_models import CategoriesResponse, HealthResponse

router = APIRouter(tags=["meta"])


@router.get("/", response_class=PlainTextResponse)
def welcome():
    return WELCOME_MESSAGE


@router.get("/health", response_model=HealthResponse)
def health(request: Request, store: ExpenseStore = Depends(get_store)):
    scheduler = getattr(request.app.state, "scheduler", None)
    return HealthResponse(
        status="ok",
        expenses=store.row_count(),
        categories=len(store.categories()),
        scheduler=scheduler is not None and scheduler.is_running,
    )


@router.get("/categories", response_model=CategoriesResponse)
def list_categories(store: ExpenseStore = Depends(get_store)):
    return CategoriesResponse(data=store.categories())
