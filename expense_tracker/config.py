"""
Expense Tracker — Configuration: category registry, server and schedule settings.
"""
import datetime as dt
import os

# ---------------------------------------------------------------------------
# Category registry: fixed at startup, order is the reporting order
# ---------------------------------------------------------------------------
CATEGORIES = ("Food", "Travel", "Entertainment", "Shopping", "Utilities")

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
HOST = os.environ.get("EXPENSE_TRACKER_HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "3000"))

WELCOME_MESSAGE = (
    "Welcome to the Expense Tracker API. Use /add-expense or /expenses in the browser."
)

# ---------------------------------------------------------------------------
# Logging: level name or number, read by logging_setup.configure_logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("EXPENSE_TRACKER_LOG_LEVEL", "INFO")

# ---------------------------------------------------------------------------
# Amounts: largest single expense accepted
# ---------------------------------------------------------------------------
MAX_AMOUNT = 1_000_000_000_000.0

# ---------------------------------------------------------------------------
# Scheduled summaries
#   daily:  every day at DAILY_SUMMARY_AT, covering today
#   weekly: on WEEKLY_SUMMARY_WEEKDAY (0=Mon .. 6=Sun) at the same time,
#           covering the last WEEKLY_LOOKBACK_DAYS days through today
# ---------------------------------------------------------------------------
DAILY_SUMMARY_AT = dt.time.fromisoformat(os.environ.get("EXPENSE_TRACKER_DAILY_AT", "00:00"))
WEEKLY_SUMMARY_WEEKDAY = int(os.environ.get("EXPENSE_TRACKER_WEEKLY_DAY", "6"))
WEEKLY_LOOKBACK_DAYS = 7


def scheduler_enabled() -> bool:
    """EXPENSE_TRACKER_SCHEDULER, read at call time so `serve --no-scheduler` can set it."""
    return os.environ.get("EXPENSE_TRACKER_SCHEDULER", "1").lower() not in ("0", "false", "no", "off")
