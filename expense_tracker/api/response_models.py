"""
Pydantic request/response schemas for the API.

Every success response is wrapped as {"status": "success", "data": ...}.
"""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExpenseIn(BaseModel):
    """Intake body. Types are left loose; the validator decides acceptance."""
    category: Optional[Any] = None
    amount: Optional[Any] = None
    date: Optional[Any] = None


class Expense(BaseModel):
    id: int
    category: str
    amount: float
    date: str


class Summary(BaseModel):
    total: float
    expenses: list[Expense]


class CategoryTotal(BaseModel):
    category: str
    total: float


class Analysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_by_category: list[CategoryTotal] = Field(alias="totalByCategory")
    monthly_totals: dict[str, float] = Field(alias="monthlyTotals")


class ExpenseResponse(BaseModel):
    status: Literal["success"] = "success"
    data: Expense


class SummaryResponse(BaseModel):
    status: Literal["success"] = "success"
    data: Summary


class AnalysisResponse(BaseModel):
    status: Literal["success"] = "success"
    data: Analysis


class CategoriesResponse(BaseModel):
    status: Literal["success"] = "success"
    data: list[str]


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    error: str


class HealthResponse(BaseModel):
    status: str
    expenses: int
    categories: int
    scheduler: bool
