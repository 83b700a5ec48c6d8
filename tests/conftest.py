"""Shared fixtures: fresh stores and an app wired to them.

Every test gets its own ExpenseStore, so no state leaks between tests.
The scheduler is disabled for API tests unless a test asks for it.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from expense_tracker.data.store import ExpenseStore
from expense_tracker.main import create_app

SEED_EXPENSES = [
    {"category": "Food", "amount": 50, "date": "2024-01-10"},
    {"category": "Travel", "amount": 100, "date": "2024-01-15"},
    {"category": "Food", "amount": 25, "date": "2024-02-01"},
]


@pytest.fixture
def store() -> ExpenseStore:
    return ExpenseStore()


@pytest.fixture
def seeded_store(store: ExpenseStore) -> ExpenseStore:
    for candidate in SEED_EXPENSES:
        store.add(candidate)
    return store


@pytest.fixture
def client(store: ExpenseStore):
    app = create_app(store=store, enable_scheduler=False)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded_client(seeded_store: ExpenseStore):
    app = create_app(store=seeded_store, enable_scheduler=False)
    with TestClient(app) as c:
        yield c
