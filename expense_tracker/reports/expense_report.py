"""
Expense Report — filtered summary plus category/month analysis, as JSON or Excel.
"""
from __future__ import annotations

import pandas as pd

from expense_tracker.analytics.common import sanitize_for_json
from expense_tracker.analytics.summary import analyze, summarize
from expense_tracker.data.schemas import ExpenseFilter, parse_date
from expense_tracker.data.store import ExpenseStore
from expense_tracker.excel.writer import ExcelWriter


EXPENSE_COLS = [
    ("id", "number", "ID"),
    ("date", "text", "Date"),
    ("category", "text", "Category"),
    ("amount", "currency", "Amount"),
]

CATEGORY_COLS = [
    ("category", "text", "Category"),
    ("total", "currency", "Total"),
]

MONTH_COLS = [
    ("month", "text", "Month"),
    ("total", "currency", "Total"),
]


def _date_range(expenses: list[dict]) -> str:
    dates = [d for d in (parse_date(e["date"]) for e in expenses) if d is not None]
    if not dates:
        return "N/A"
    return f"{min(dates)} to {max(dates)}"


def generate_json(store: ExpenseStore, flt: ExpenseFilter | None = None) -> dict:
    """Summary for the filter, analysis over all records, and the covered date range."""
    flt = flt or ExpenseFilter()
    summary = summarize(store, flt).to_dict()
    analysis = analyze(store).to_dict()

    return sanitize_for_json({
        "filter": flt.label,
        "date_range": _date_range(summary["expenses"]),
        "summary": summary,
        "analysis": analysis,
    })


def generate_excel(store: ExpenseStore, flt: ExpenseFilter | None = None) -> bytes:
    """Styled workbook: overview KPIs, matching expenses, by-category and by-month sheets."""
    data = generate_json(store, flt)
    summary = data["summary"]
    analysis = data["analysis"]
    ew = ExcelWriter()

    ws = ew.add_sheet("Overview")
    ew.write_title(ws, "EXPENSE REPORT",
                   f"{data['filter']}  |  {data['date_range']}  |  Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 5, "SPENDING")
    ew.write_kpi_row(ws, row, [
        (summary["total"], "TOTAL SPEND", "currency"),
        (len(summary["expenses"]), "EXPENSES", "number"),
        (len(analysis["monthlyTotals"]), "MONTHS WITH SPEND", "number"),
    ])

    ws_e = ew.add_sheet("Expenses")
    ew.write_table(ws_e, 1, EXPENSE_COLS, summary["expenses"], show_total=True)

    by_category = analysis["totalByCategory"]
    top = max((c["total"] for c in by_category), default=0)
    ws_c = ew.add_sheet("By Category")
    ew.write_table(
        ws_c, 1, CATEGORY_COLS, by_category,
        highlight_fn=lambda _, r: "gold" if top > 0 and r["total"] == top else None,
        show_total=True,
    )

    months = [{"month": m, "total": t} for m, t in sorted(analysis["monthlyTotals"].items())]
    ws_m = ew.add_sheet("By Month")
    ew.write_table(ws_m, 1, MONTH_COLS, months, show_total=True)

    return ew.to_bytes()
