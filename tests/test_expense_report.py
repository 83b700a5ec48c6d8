import io

from openpyxl import load_workbook

from expense_tracker.analytics.common import sanitize_for_json
from expense_tracker.data.schemas import ExpenseFilter
from expense_tracker.reports import expense_report

import numpy as np


def test_generate_json(seeded_store):
    data = expense_report.generate_json(seeded_store, ExpenseFilter(category="Food"))

    assert data["filter"] == "Food"
    assert data["date_range"] == "2024-01-10 to 2024-02-01"
    assert data["summary"]["total"] == 75.0
    assert data["analysis"]["monthlyTotals"] == {"2024-01": 150.0, "2024-02": 25.0}


def test_generate_json_empty(store):
    data = expense_report.generate_json(store)
    assert data["filter"] == "All Time"
    assert data["date_range"] == "N/A"
    assert data["summary"] == {"total": 0.0, "expenses": []}


def test_generate_excel(seeded_store):
    wb = load_workbook(io.BytesIO(expense_report.generate_excel(seeded_store)))

    ws = wb["Expenses"]
    assert [ws.cell(row=1, column=c).value for c in range(1, 5)] == ["ID", "Date", "Category", "Amount"]
    assert [ws.cell(row=r, column=1).value for r in range(2, 5)] == [1, 2, 3]
    assert ws.cell(row=5, column=1).value == "TOTAL"
    assert ws.cell(row=5, column=4).value == 175

    ws = wb["By Category"]
    assert [ws.cell(row=r, column=1).value for r in range(2, 7)] == [
        "Food", "Travel", "Entertainment", "Shopping", "Utilities",
    ]
    assert ws.cell(row=3, column=2).value == 100
    assert ws.cell(row=7, column=2).value == 175

    ws = wb["By Month"]
    assert ws.cell(row=2, column=1).value == "2024-01"
    assert ws.cell(row=3, column=2).value == 25

    assert wb["Overview"].cell(row=7, column=1).value == 175


def test_generate_excel_empty_store(store):
    wb = load_workbook(io.BytesIO(expense_report.generate_excel(store)))
    assert wb["Expenses"].max_row == 1


def test_sanitize_for_json():
    assert sanitize_for_json({"a": np.float64(1.5), "b": [np.int64(2), float("nan")], 3: np.bool_(True)}) == {
        "a": 1.5, "b": [2, 0.0], "3": True,
    }
