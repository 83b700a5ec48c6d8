"""
Expense Tracker — FastAPI app factory with an owned in-memory store.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from expense_tracker.config import scheduler_enabled
from expense_tracker.data.store import ExpenseStore
from expense_tracker.data.validation import ValidationError
from expense_tracker.logging_setup import configure_logging, get_logger
from expense_tracker.scheduler import SummaryScheduler
from expense_tracker.api.dependencies import validation_error_handler
from expense_tracker.api.router_meta import router as meta_router
from expense_tracker.api.router_expenses import router as expenses_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the summary scheduler (when enabled) for the app's lifetime."""
    configure_logging()
    scheduler = None
    if app.state.scheduler_enabled:
        scheduler = SummaryScheduler(app.state.store)
        scheduler.start()
    app.state.scheduler = scheduler

    logger.info("Expense Tracker ready — %d expense(s) in memory", app.state.store.row_count())
    yield

    if scheduler is not None:
        scheduler.stop()
    logger.info("Expense Tracker shut down")


def create_app(store: ExpenseStore | None = None, enable_scheduler: bool | None = None) -> FastAPI:
    """Build the app. `enable_scheduler=None` defers to $EXPENSE_TRACKER_SCHEDULER."""
    app = FastAPI(
        title="Expense Tracker API",
        description="In-memory expense tracking with filtered summaries and monthly analysis",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else ExpenseStore()
    app.state.scheduler_enabled = scheduler_enabled() if enable_scheduler is None else enable_scheduler
    app.state.scheduler = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)

    app.include_router(meta_router)
    app.include_router(expenses_router)

    return app


app = create_app()
