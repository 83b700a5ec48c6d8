"""
ExpenseStore — append-only, in-memory expense records.

Owned by the application (app.state.store) and handed to request handlers
through a dependency, so tests and future backends can swap it out.
Nothing is persisted; records are lost on restart.
"""
from __future__ import annotations

import threading
from typing import Any, Mapping

import pandas as pd

from expense_tracker.config import CATEGORIES
from expense_tracker.data.schemas import ExpenseRecord, parse_date
from expense_tracker.data.validation import coerce_amount, validate
from expense_tracker.logging_setup import get_logger

logger = get_logger(__name__)

FRAME_COLUMNS = ["id", "category", "amount", "date"]


def records_frame(records: list[ExpenseRecord]) -> pd.DataFrame:
    """One row per record in the given order, plus `day`.

    `day` is the parsed date as datetime64, NaT where it doesn't parse.
    """
    df = pd.DataFrame([r.to_dict() for r in records], columns=FRAME_COLUMNS)
    df["amount"] = df["amount"].astype(float)
    df["day"] = pd.to_datetime(df["date"].map(parse_date))
    return df


class ExpenseStore:
    """Ordered expense records with ids from a monotonic counter.

    There is no update or delete. The lock serialises appends against
    snapshot reads (request threads and the scheduler thread share a store).
    """

    def __init__(self) -> None:
        self._records: list[ExpenseRecord] = []
        self._next_id = 1
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, category: str, amount: float, date: str) -> ExpenseRecord:
        """Store an already-validated expense and return it with its id."""
        with self._lock:
            record = ExpenseRecord(id=self._next_id, category=category, amount=float(amount), date=date)
            self._records.append(record)
            self._next_id += 1
        return record

    def add(self, candidate: Mapping[str, Any]) -> ExpenseRecord:
        """Validate a candidate and append it.

        Raises ValidationError (store unchanged) when the candidate is rejected.
        """
        result = validate(candidate)
        if not result.valid:
            logger.info("Rejected expense %r: %s", dict(candidate), result.error)
        result.raise_for_error()

        record = self.append(
            candidate["category"],
            coerce_amount(candidate["amount"]),
            str(candidate["date"]).strip(),
        )
        logger.debug("Stored expense #%d (%s %.2f on %s)", record.id, record.category, record.amount, record.date)
        return record

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def records(self) -> list[ExpenseRecord]:
        """Snapshot of all records in insertion order."""
        with self._lock:
            return list(self._records)

    def to_frame(self) -> pd.DataFrame:
        """Snapshot as a DataFrame (see records_frame)."""
        return records_frame(self.records())

    def row_count(self) -> int:
        with self._lock:
            return len(self._records)

    def categories(self) -> list[str]:
        """The category registry, in reporting order."""
        return list(CATEGORIES)
