"""
Summary engine — filtered totals and category/month breakdowns over the store.

Both entry points work on a snapshot of the store and never mutate it.
"""
from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from expense_tracker.analytics.common import safe_sum
from expense_tracker.config import CATEGORIES
from expense_tracker.data.schemas import ExpenseFilter, ExpenseRecord
from expense_tracker.data.store import ExpenseStore, records_frame


@dataclass
class SummaryResult:
    total: float
    expenses: list[ExpenseRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"total": self.total, "expenses": [e.to_dict() for e in self.expenses]}


@dataclass
class CategoryTotal:
    category: str
    total: float


@dataclass
class AnalysisResult:
    total_by_category: list[CategoryTotal]
    monthly_totals: dict[str, float]

    def to_dict(self) -> dict:
        return {
            "totalByCategory": [{"category": c.category, "total": c.total} for c in self.total_by_category],
            "monthlyTotals": dict(self.monthly_totals),
        }


def _apply_filter(df: pd.DataFrame, flt: ExpenseFilter) -> pd.DataFrame:
    """Narrow the frame by category and inclusive date range.

    Rows whose date doesn't parse (NaT) fail every date comparison, so they
    drop out whenever a bound is set. A bound that doesn't parse matches nothing.
    """
    if flt.category:
        df = df[df["category"] == flt.category]

    if flt.has_date_range:
        if flt.is_malformed:
            return df.iloc[0:0]
        start, end = flt.resolve()
        if start is not None:
            df = df[df["day"] >= pd.Timestamp(start)]
        if end is not None:
            df = df[df["day"] <= pd.Timestamp(end)]

    return df


def summarize(store: ExpenseStore, flt: ExpenseFilter | None = None) -> SummaryResult:
    """Total and matching records for a filter, in insertion order."""
    records = store.records()
    if not records:
        return SummaryResult(total=0.0)

    df = records_frame(records)
    if flt is not None:
        df = _apply_filter(df, flt)

    # the frame keeps a RangeIndex over the snapshot, so filtering never reorders
    return SummaryResult(
        total=safe_sum(df["amount"]),
        expenses=[records[i] for i in df.index],
    )


def analyze(store: ExpenseStore) -> AnalysisResult:
    """Totals per registry category (zero-filled) and per calendar month."""
    df = store.to_frame()

    if df.empty:
        by_category = pd.Series(dtype=float)
        monthly: dict[str, float] = {}
    else:
        by_category = df.groupby("category")["amount"].sum()
        dated = df.dropna(subset=["day"])
        month_key = dated["day"].dt.strftime("%Y-%m")
        monthly = {str(k): float(v) for k, v in dated.groupby(month_key)["amount"].sum().items()}

    return AnalysisResult(
        total_by_category=[CategoryTotal(c, float(by_category.get(c, 0.0))) for c in CATEGORIES],
        monthly_totals=monthly,
    )
