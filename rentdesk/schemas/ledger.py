"""
Expense and income schemas.
"""
from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, model_validator

from rentdesk.schemas.common import Recurrence, Scope, check_scope

ExpenseCategory = Literal[
    "Repair",
    "Upgrade",
    "Plumbing",
    "HVAC",
    "Renovation",
    "Insurance",
    "Tax",
    "Maintenance",
    "Other",
]
IncomeCategory = Literal["Rent", "Taxes", "Fees", "Other"]


class _LedgerEntryCreate(BaseModel):
    id: Optional[str] = Field(None, max_length=64)
    title: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    entry_date: date
    scope: Scope
    unit_id: Optional[str] = None
    recurrence: Recurrence
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _scope_matches_unit(self):
        self.unit_id = check_scope(self.scope, self.unit_id)
        return self


class _LedgerEntryUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[float] = Field(None, gt=0)
    entry_date: Optional[date] = None
    scope: Optional[Scope] = None
    unit_id: Optional[str] = None
    recurrence: Optional[Recurrence] = None
    notes: Optional[str] = None


class _LedgerEntryResponse(BaseModel):
    id: str
    title: str
    amount: float
    entry_date: date
    category: str
    scope: str
    unit_id: Optional[str] = None
    recurrence: str
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ExpenseCreate(_LedgerEntryCreate):
    category: ExpenseCategory


class ExpenseUpdate(_LedgerEntryUpdate):
    category: Optional[ExpenseCategory] = None


class ExpenseResponse(_LedgerEntryResponse):
    pass


class ExpenseStats(BaseModel):
    """Yearly expense totals."""

    year: int
    total_yearly: float
    monthly_recurring: float
    yearly_recurring: float
    one_time_this_year: float


class IncomeCreate(_LedgerEntryCreate):
    category: IncomeCategory = "Rent"


class IncomeUpdate(_LedgerEntryUpdate):
    category: Optional[IncomeCategory] = None


class IncomeResponse(_LedgerEntryResponse):
    pass
