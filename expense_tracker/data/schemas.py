"""
Expense schemas: records, query filters, date parsing.
"""
from __future__ import annotations

import datetime as dt
import warnings
from dataclasses import asdict, dataclass
from typing import Optional

import pandas as pd


# pandas resolves these relative to the wall clock; they are not calendar dates
_RELATIVE_KEYWORDS = {"now", "today"}


def parse_date(value) -> Optional[dt.date]:
    """Parse a date-like value to a calendar date, or None if it can't be.

    Any format pandas understands is accepted ("2024-01-10", "Jan 10 2024",
    "2024-01-10T08:30:00Z", ...). Time and timezone parts are dropped.
    Never raises.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or text.lower() in _RELATIVE_KEYWORDS:
        return None

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            ts = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts.date()


@dataclass(frozen=True)
class ExpenseRecord:
    """A single accepted expense. Immutable once stored."""
    id: int
    category: str
    amount: float
    date: str                            # as submitted; parses via parse_date

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ExpenseFilter:
    """Optional criteria narrowing which records a summary considers.

    Dates are kept as received; empty strings count as absent.
    """
    category: Optional[str] = None
    start_date: Optional[str] = None     # inclusive
    end_date: Optional[str] = None       # inclusive

    @classmethod
    def for_day(cls, day: dt.date) -> "ExpenseFilter":
        return cls(start_date=day.isoformat(), end_date=day.isoformat())

    @classmethod
    def trailing_days(cls, end: dt.date, days: int) -> "ExpenseFilter":
        """From `days` days before `end` through `end`."""
        start = end - dt.timedelta(days=days)
        return cls(start_date=start.isoformat(), end_date=end.isoformat())

    @property
    def has_date_range(self) -> bool:
        return bool(self.start_date or self.end_date)

    def resolve(self) -> tuple[Optional[dt.date], Optional[dt.date]]:
        """Return parsed (start, end); a bound that fails to parse is None."""
        start = parse_date(self.start_date) if self.start_date else None
        end = parse_date(self.end_date) if self.end_date else None
        return start, end

    @property
    def is_malformed(self) -> bool:
        """True when a date bound was given but does not parse."""
        start, end = self.resolve()
        return bool(self.start_date and start is None) or bool(self.end_date and end is None)

    @property
    def label(self) -> str:
        """Human-readable label for the filter."""
        parts = []
        if self.category:
            parts.append(self.category)
        if self.has_date_range:
            s = self.start_date or "?"
            e = self.end_date or "?"
            parts.append(s if s == e else f"{s} to {e}")
        return ", ".join(parts) if parts else "All Time"
