"""Operating expense models."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ExpenseCreate(BaseModel):
    category: str = Field(..., min_length=1, max_length=100)
    amount_cents: int = Field(..., gt=0)
    description: str | None = Field(None, max_length=1000)
    spent_on: date


class Expense(BaseModel):
    id: UUID
    category: str
    amount_cents: int
    description: str | None
    spent_on: date
    created_at: datetime

    model_config = {"from_attributes": True}
