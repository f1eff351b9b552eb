"""
Expenses endpoints.
"""
from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from rentdesk.api.deps import ensure_unit_exists
from rentdesk.database import get_db
from rentdesk.models.ledger import Expense
from rentdesk.schemas.common import check_scope, update_fields
from rentdesk.schemas.ledger import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseStats,
)
from rentdesk.services.ledger import compute_expense_stats

router = APIRouter()


async def _get_expense(db: AsyncSession, expense_id: str) -> Expense:
    expense = await db.get(Expense, expense_id)

    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found",
        )

    return expense


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    unit_id: Optional[str] = Query(None, description="Only expenses scoped to this unit"),
    scope: Optional[Literal["global"]] = Query(None, description="'global' for portfolio-wide expenses"),
    db: AsyncSession = Depends(get_db),
):
    """List expenses, newest first."""
    query = select(Expense)

    if unit_id:
        query = query.where(Expense.scope == "Unit", Expense.unit_id == unit_id)
    elif scope == "global":
        query = query.where(Expense.scope == "Global")

    query = query.order_by(Expense.entry_date.desc(), Expense.created_at.desc())

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/stats", response_model=ExpenseStats)
async def get_expense_stats(
    year: Optional[int] = Query(None, ge=1900, le=3000),
    db: AsyncSession = Depends(get_db),
):
    """Yearly expense totals (defaults to the current year)."""
    result = await db.execute(select(Expense))
    return compute_expense_stats(result.scalars().all(), year or date.today().year)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create an expense."""
    await ensure_unit_exists(db, expense_data.unit_id)

    if expense_data.id and await db.get(Expense, expense_data.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Expense with this id already exists",
        )

    expense = Expense(**expense_data.model_dump(exclude_none=True))

    db.add(expense)
    await db.commit()
    await db.refresh(expense)

    return expense


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific expense."""
    return await _get_expense(db, expense_id)


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: str,
    expense_data: ExpenseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an expense."""
    expense = await _get_expense(db, expense_id)

    update_data = update_fields(expense_data, nullable=("unit_id", "notes"))
    try:
        update_data["unit_id"] = check_scope(
            update_data.get("scope", expense.scope),
            update_data.get("unit_id", expense.unit_id),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    await ensure_unit_exists(db, update_data["unit_id"])

    for field, value in update_data.items():
        setattr(expense, field, value)

    await db.commit()
    await db.refresh(expense)

    return expense


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete an expense."""
    expense = await _get_expense(db, expense_id)

    await db.delete(expense)
    await db.commit()
