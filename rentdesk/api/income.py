"""
Income endpoints.
"""
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from rentdesk.api.deps import ensure_unit_exists
from rentdesk.database import get_db
from rentdesk.models.ledger import Income
from rentdesk.schemas.common import check_scope, update_fields
from rentdesk.schemas.ledger import IncomeCreate, IncomeUpdate, IncomeResponse

router = APIRouter()


async def _get_income(db: AsyncSession, income_id: str) -> Income:
    income = await db.get(Income, income_id)

    if not income:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Income not found",
        )

    return income


@router.get("", response_model=List[IncomeResponse])
async def list_income(
    unit_id: Optional[str] = Query(None, description="Only income scoped to this unit"),
    scope: Optional[Literal["global"]] = Query(None, description="'global' for portfolio-wide income"),
    db: AsyncSession = Depends(get_db),
):
    """List income, newest first."""
    query = select(Income)

    if unit_id:
        query = query.where(Income.scope == "Unit", Income.unit_id == unit_id)
    elif scope == "global":
        query = query.where(Income.scope == "Global")

    query = query.order_by(Income.entry_date.desc(), Income.created_at.desc())

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=IncomeResponse, status_code=status.HTTP_201_CREATED)
async def create_income(
    income_data: IncomeCreate,
    db: AsyncSession = Depends(get_db),
):
    """Record income."""
    await ensure_unit_exists(db, income_data.unit_id)

    if income_data.id and await db.get(Income, income_data.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Income with this id already exists",
        )

    income = Income(**income_data.model_dump(exclude_none=True))

    db.add(income)
    await db.commit()
    await db.refresh(income)

    return income


@router.get("/{income_id}", response_model=IncomeResponse)
async def get_income(
    income_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific income record."""
    return await _get_income(db, income_id)


@router.put("/{income_id}", response_model=IncomeResponse)
async def update_income(
    income_id: str,
    income_data: IncomeUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an income record."""
    income = await _get_income(db, income_id)

    update_data = update_fields(income_data, nullable=("unit_id", "notes"))
    try:
        update_data["unit_id"] = check_scope(
            update_data.get("scope", income.scope),
            update_data.get("unit_id", income.unit_id),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    await ensure_unit_exists(db, update_data["unit_id"])

    for field, value in update_data.items():
        setattr(income, field, value)

    await db.commit()
    await db.refresh(income)

    return income


@router.delete("/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_income(
    income_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete an income record."""
    income = await _get_income(db, income_id)

    await db.delete(income)
    await db.commit()
