import threading

import pytest

from expense_tracker.config import CATEGORIES
from expense_tracker.data.schemas import ExpenseRecord
from expense_tracker.data.validation import INVALID_CATEGORY, ValidationError


def test_append_assigns_sequential_ids(store):
    r1 = store.append("Food", 10, "2024-01-01")
    r2 = store.append("Travel", 20, "2024-01-02")
    r3 = store.append("Shopping", 30, "2024-01-03")

    assert [r1.id, r2.id, r3.id] == [1, 2, 3]
    assert store.records() == [r1, r2, r3]


def test_records_keep_insertion_order(store):
    dates = ["2024-03-01", "2024-01-01", "2024-02-01"]
    for d in dates:
        store.append("Food", 1, d)
    assert [r.date for r in store.records()] == dates


def test_add_coerces_amount_to_float(store):
    record = store.add({"category": "Food", "amount": "12.50", "date": "2024-01-10"})
    assert record == ExpenseRecord(id=1, category="Food", amount=12.5, date="2024-01-10")
    assert isinstance(record.amount, float)


def test_rejected_expense_leaves_store_unchanged(store):
    store.add({"category": "Food", "amount": 5, "date": "2024-01-01"})

    with pytest.raises(ValidationError) as exc:
        store.add({"category": "Rent", "amount": 10, "date": "2024-01-01"})

    assert exc.value.reason == INVALID_CATEGORY
    assert store.row_count() == 1


def test_rejection_does_not_consume_an_id(store):
    with pytest.raises(ValidationError):
        store.add({"category": "Food", "amount": 0, "date": "2024-01-01"})
    record = store.add({"category": "Food", "amount": 1, "date": "2024-01-01"})
    assert record.id == 1


def test_records_returns_a_snapshot(store):
    store.append("Food", 1, "2024-01-01")
    snapshot = store.records()
    snapshot.clear()
    assert store.row_count() == 1


def test_records_are_immutable(store):
    record = store.append("Food", 1, "2024-01-01")
    with pytest.raises(AttributeError):
        record.amount = 100


def test_to_frame(store):
    store.append("Food", 10, "2024-01-10")
    store.append("Travel", 5, "garbage")
    df = store.to_frame()

    assert list(df["id"]) == [1, 2]
    assert list(df["amount"]) == [10.0, 5.0]
    assert str(df.loc[0, "day"].date()) == "2024-01-10"
    assert df["day"].isna().tolist() == [False, True]


def test_to_frame_empty(store):
    df = store.to_frame()
    assert df.empty
    assert {"id", "category", "amount", "date", "day"} <= set(df.columns)


def test_categories_follow_registry(store):
    assert store.categories() == list(CATEGORIES)
    assert CATEGORIES == ("Food", "Travel", "Entertainment", "Shopping", "Utilities")


def test_concurrent_appends_get_unique_ids(store):
    def worker():
        for _ in range(200):
            store.append("Food", 1, "2024-01-01")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [r.id for r in store.records()]
    assert len(ids) == 800
    assert sorted(ids) == list(range(1, 801))
