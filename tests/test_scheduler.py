import datetime as dt
import logging
import threading

import pytest

from expense_tracker.data.schemas import ExpenseFilter
from expense_tracker.scheduler import SummaryScheduler, log_sink


class RecordingSink:
    def __init__(self, expected_calls: int = 1, fail_on: str | None = None):
        self.calls = []
        self.fail_on = fail_on
        self.expected_calls = expected_calls
        self.done = threading.Event()

    def __call__(self, label, summary, flt):
        self.calls.append((label, summary, flt))
        if len(self.calls) >= self.expected_calls:
            self.done.set()
        if label == self.fail_on:
            raise RuntimeError("sink unavailable")


def _scheduler(store, sink=None, **kwargs):
    return SummaryScheduler(store, sink=sink or RecordingSink(), daily_at=dt.time(0, 0), weekly_on=6, **kwargs)


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------

def test_daily_summary_covers_today_only(seeded_store):
    sink = RecordingSink()
    result = _scheduler(seeded_store, sink).run_daily(dt.date(2024, 1, 15))

    label, summary, flt = sink.calls[0]
    assert label == "Daily"
    assert summary is result
    assert flt == ExpenseFilter(start_date="2024-01-15", end_date="2024-01-15")
    assert result.total == 100
    assert [e.id for e in result.expenses] == [2]


def test_weekly_summary_covers_last_seven_days_through_today(seeded_store):
    sink = RecordingSink()
    result = _scheduler(seeded_store, sink).run_weekly(dt.date(2024, 1, 17))

    label, _, flt = sink.calls[0]
    assert label == "Weekly"
    assert flt == ExpenseFilter(start_date="2024-01-10", end_date="2024-01-17")
    assert result.total == 150


def test_jobs_default_to_clock_date(seeded_store):
    sink = RecordingSink()
    scheduler = _scheduler(seeded_store, sink, clock=lambda: dt.datetime(2024, 2, 1, 9, 30))
    assert scheduler.run_daily().total == 25


def test_daily_summary_with_no_expenses(store):
    sink = RecordingSink()
    result = _scheduler(store, sink).run_daily(dt.date(2024, 1, 1))
    assert result.total == 0.0
    assert result.expenses == []


def test_log_sink_writes_one_line(seeded_store):
    records = []

    class ListHandler(logging.Handler):
        def emit(self, record):
            records.append(record)

    logger = logging.getLogger("expense_tracker.scheduler")
    handler = ListHandler()
    old_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        SummaryScheduler(seeded_store, sink=log_sink).run_daily(dt.date(2024, 1, 10))
    finally:
        logger.removeHandler(handler)
        logger.setLevel(old_level)

    assert len(records) == 1
    message = records[0].getMessage()
    assert message.startswith("Daily Expense Summary (2024-01-10)")
    assert "total=50.00" in message
    assert "1 expense(s)" in message


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------

def test_next_daily_run(store):
    scheduler = _scheduler(store)
    assert scheduler.next_daily_run(dt.datetime(2024, 1, 10, 12, 0)) == dt.datetime(2024, 1, 11, 0, 0)
    assert scheduler.next_daily_run(dt.datetime(2024, 1, 11, 0, 0)) == dt.datetime(2024, 1, 12, 0, 0)


def test_next_daily_run_later_in_the_day(store):
    scheduler = SummaryScheduler(store, sink=RecordingSink(), daily_at=dt.time(18, 0))
    assert scheduler.next_daily_run(dt.datetime(2024, 1, 10, 12, 0)) == dt.datetime(2024, 1, 10, 18, 0)


def test_next_weekly_run_is_sunday(store):
    scheduler = _scheduler(store)
    # 2024-01-10 is a Wednesday
    assert scheduler.next_weekly_run(dt.datetime(2024, 1, 10, 12, 0)) == dt.datetime(2024, 1, 14, 0, 0)
    assert scheduler.next_weekly_run(dt.datetime(2024, 1, 13, 23, 59)) == dt.datetime(2024, 1, 14, 0, 0)
    assert scheduler.next_weekly_run(dt.datetime(2024, 1, 14, 0, 0)) == dt.datetime(2024, 1, 21, 0, 0)


def test_invalid_weekday_rejected(store):
    with pytest.raises(ValueError):
        SummaryScheduler(store, weekly_on=7)


# ---------------------------------------------------------------------------
# Background loop
# ---------------------------------------------------------------------------

def _stepping_clock(*times):
    """Returns the given times in order, then keeps returning the last one."""
    remaining = list(times)

    def clock():
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return clock


def test_loop_fires_daily_and_weekly_at_sunday_midnight(seeded_store):
    sink = RecordingSink(expected_calls=2)
    clock = _stepping_clock(
        dt.datetime(2024, 1, 6, 23, 59, 59),   # Saturday, when the loop starts
        dt.datetime(2024, 1, 7, 0, 0, 0),      # due
        dt.datetime(2024, 1, 7, 0, 0, 0),
        dt.datetime(2024, 1, 7, 0, 0, 1),      # then idle until tomorrow
    )
    scheduler = _scheduler(seeded_store, sink, clock=clock)

    scheduler.start()
    try:
        assert sink.done.wait(5)
    finally:
        scheduler.stop()

    assert [label for label, _, _ in sink.calls] == ["Daily", "Weekly"]
    assert not scheduler.is_running


def test_sink_failure_does_not_stop_other_summaries(seeded_store):
    sink = RecordingSink(expected_calls=2, fail_on="Daily")
    clock = _stepping_clock(
        dt.datetime(2024, 1, 6, 23, 59, 59),
        dt.datetime(2024, 1, 7, 0, 0, 0),
        dt.datetime(2024, 1, 7, 0, 0, 0),
        dt.datetime(2024, 1, 7, 0, 0, 1),
    )
    scheduler = _scheduler(seeded_store, sink, clock=clock)

    scheduler.start()
    try:
        assert sink.done.wait(5)
    finally:
        scheduler.stop()

    assert [label for label, _, _ in sink.calls] == ["Daily", "Weekly"]


def test_start_is_idempotent_and_stop_joins(store):
    scheduler = _scheduler(store, clock=lambda: dt.datetime(2024, 1, 10, 12, 0))
    scheduler.start()
    scheduler.start()
    assert scheduler.is_running
    scheduler.stop()
    assert not scheduler.is_running
