"""Expense records, validation, and the in-memory store."""
from .schemas import ExpenseFilter, ExpenseRecord, parse_date
from .validation import ValidationError, ValidationResult, validate
from .store import ExpenseStore
