"""
Units endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from rentdesk.api.deps import get_document_storage
from rentdesk.config import settings
from rentdesk.database import get_db
from rentdesk.models.document import Document
from rentdesk.models.unit import Unit
from rentdesk.schemas.common import update_fields
from rentdesk.schemas.unit import UnitCreate, UnitUpdate, UnitResponse
from rentdesk.services.sample_data import seed_sample_data
from rentdesk.services.storage import DocumentStorage

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_unit(db: AsyncSession, unit_id: str) -> Unit:
    unit = await db.get(Unit, unit_id)

    if not unit:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unit not found",
        )

    return unit


@router.get("", response_model=List[UnitResponse])
async def list_units(db: AsyncSession = Depends(get_db)):
    """List all units, seeding sample data into an empty database on first load."""
    if settings.seed_sample_data:
        await seed_sample_data(db)

    result = await db.execute(select(Unit).order_by(Unit.name.asc()))
    return result.scalars().all()


@router.post("", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
async def create_unit(
    unit_data: UnitCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a unit."""
    if unit_data.id and await db.get(Unit, unit_data.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Unit with this id already exists",
        )

    unit = Unit(**unit_data.model_dump(exclude_none=True))

    db.add(unit)
    await db.commit()
    await db.refresh(unit)

    return unit


@router.get("/{unit_id}", response_model=UnitResponse)
async def get_unit(
    unit_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific unit."""
    return await _get_unit(db, unit_id)


@router.put("/{unit_id}", response_model=UnitResponse)
async def update_unit(
    unit_id: str,
    unit_data: UnitUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a unit."""
    unit = await _get_unit(db, unit_id)

    update_data = update_fields(unit_data, nullable=("location", "contract_end"))
    for field, value in update_data.items():
        setattr(unit, field, value)

    await db.commit()
    await db.refresh(unit)

    return unit


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_unit(
    unit_id: str,
    db: AsyncSession = Depends(get_db),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """Delete a unit along with its records and stored document files."""
    unit = await _get_unit(db, unit_id)

    result = await db.execute(
        select(Document.storage_key).where(Document.unit_id == unit_id)
    )
    storage_keys = result.scalars().all()

    await db.delete(unit)
    await db.commit()

    for key in storage_keys:
        try:
            await storage.delete(key)
        except OSError:
            logger.exception("Failed to remove stored file %s of unit %s", key, unit_id)
