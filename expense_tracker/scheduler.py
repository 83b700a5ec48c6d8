"""
Scheduled expense summaries — daily and weekly, written to a pluggable sink.

Purely observational: no retries, no alerting, no history is kept.
"""
from __future__ import annotations

import datetime as dt
import threading
from typing import Callable, Optional

from expense_tracker.analytics.summary import SummaryResult, summarize
from expense_tracker.config import DAILY_SUMMARY_AT, WEEKLY_LOOKBACK_DAYS, WEEKLY_SUMMARY_WEEKDAY
from expense_tracker.data.schemas import ExpenseFilter
from expense_tracker.data.store import ExpenseStore
from expense_tracker.logging_setup import get_logger

logger = get_logger(__name__)

# sink(label, summary, filter); label is "Daily" or "Weekly"
SummarySink = Callable[[str, SummaryResult, ExpenseFilter], None]


def log_sink(label: str, summary: SummaryResult, flt: ExpenseFilter) -> None:
    """Default sink: one INFO line per scheduled summary."""
    logger.info(
        "%s Expense Summary (%s): total=%.2f across %d expense(s)",
        label, flt.label, summary.total, len(summary.expenses),
    )


class SummaryScheduler:
    """Fires the daily and weekly summaries from a background thread."""

    def __init__(
        self,
        store: ExpenseStore,
        sink: SummarySink = log_sink,
        daily_at: dt.time = DAILY_SUMMARY_AT,
        weekly_on: int = WEEKLY_SUMMARY_WEEKDAY,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        if not 0 <= weekly_on <= 6:
            raise ValueError(f"weekly_on must be 0 (Monday) .. 6 (Sunday), got {weekly_on}")
        self.store = store
        self.sink = sink
        self.daily_at = daily_at
        self.weekly_on = weekly_on
        self.clock = clock
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def run_daily(self, today: dt.date | None = None) -> SummaryResult:
        """Summarize today's expenses and hand the result to the sink."""
        today = today or self.clock().date()
        return self._run("Daily", ExpenseFilter.for_day(today))

    def run_weekly(self, today: dt.date | None = None) -> SummaryResult:
        """Summarize the last week through today and hand the result to the sink."""
        today = today or self.clock().date()
        return self._run("Weekly", ExpenseFilter.trailing_days(today, WEEKLY_LOOKBACK_DAYS))

    def _run(self, label: str, flt: ExpenseFilter) -> SummaryResult:
        summary = summarize(self.store, flt)
        self.sink(label, summary, flt)
        return summary

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------

    def next_daily_run(self, now: dt.datetime) -> dt.datetime:
        """First daily fire time strictly after `now`."""
        candidate = dt.datetime.combine(now.date(), self.daily_at)
        if candidate <= now:
            candidate += dt.timedelta(days=1)
        return candidate

    def next_weekly_run(self, now: dt.datetime) -> dt.datetime:
        """First weekly fire time strictly after `now`."""
        days_ahead = (self.weekly_on - now.weekday()) % 7
        candidate = dt.datetime.combine(now.date() + dt.timedelta(days=days_ahead), self.daily_at)
        if candidate <= now:
            candidate += dt.timedelta(days=7)
        return candidate

    # ------------------------------------------------------------------
    # Background loop
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="expense-summary-scheduler", daemon=True)
        self._thread.start()
        logger.info(
            "Summary scheduler started (daily at %s, weekly on weekday %d)",
            self.daily_at.strftime("%H:%M"), self.weekly_on,
        )

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Summary scheduler stopped")

    def _loop(self) -> None:
        now = self.clock()
        next_daily = self.next_daily_run(now)
        next_weekly = self.next_weekly_run(now)

        while not self._stop.is_set():
            wait = (min(next_daily, next_weekly) - self.clock()).total_seconds()
            if wait > 0 and self._stop.wait(wait):
                break

            now = self.clock()
            if now >= next_daily:
                self._fire(self.run_daily, now.date())
                next_daily = self.next_daily_run(now)
            if now >= next_weekly:
                self._fire(self.run_weekly, now.date())
                next_weekly = self.next_weekly_run(now)

    def _fire(self, job: Callable[[dt.date], SummaryResult], today: dt.date) -> None:
        try:
            job(today)
        except Exception:
            logger.exception("Scheduled summary %s failed", job.__name__)
