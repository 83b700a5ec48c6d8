"""
Expense validation — the acceptance rule every stored record passes.

Rules are checked in order and the first failure wins:
  1. category is one of config.CATEGORIES
  2. amount is a number greater than zero and at most config.MAX_AMOUNT
  3. date parses as a calendar date
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from expense_tracker.config import CATEGORIES, MAX_AMOUNT
from expense_tracker.data.schemas import parse_date

INVALID_CATEGORY = "Invalid category"
INVALID_AMOUNT = "Amount must be a positive number"
INVALID_DATE = "Invalid date format"


class ValidationError(ValueError):
    """A candidate expense was rejected; `reason` is client-facing."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None

    def raise_for_error(self) -> None:
        if not self.valid:
            raise ValidationError(self.error)


def coerce_amount(value: Any) -> Optional[float]:
    """Numbers and numeric strings to float; None unless 0 < amount <= MAX_AMOUNT."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or not 0 < amount <= MAX_AMOUNT:
        return None
    return amount


def validate(candidate: Mapping[str, Any]) -> ValidationResult:
    """Check a candidate expense against the acceptance rules."""
    category = candidate.get("category")
    if not isinstance(category, str) or category not in CATEGORIES:
        return ValidationResult(False, INVALID_CATEGORY)

    if coerce_amount(candidate.get("amount")) is None:
        return ValidationResult(False, INVALID_AMOUNT)

    if parse_date(candidate.get("date")) is None:
        return ValidationResult(False, INVALID_DATE)

    return ValidationResult(True)
