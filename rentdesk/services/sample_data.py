"""
Sample portfolio inserted into an empty database.
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentdesk.models.ledger import Expense
from rentdesk.models.unit import Unit

logger = logging.getLogger(__name__)

SAMPLE_UNITS = [
    {
        "id": "unit-1",
        "name": "Commercial Store",
        "property_type": "Commercial",
        "location": "Downtown",
        "address": "12 Market St",
        "monthly_rent": 8900,
        "tenant": {"name": "Blueberry Books", "phone": "555-301-1001", "email": "info@blueberrybooks.co"},
        "contract_start": date(2024, 1, 1),
    },
    {
        "id": "unit-2",
        "name": "House A - Unit 1",
        "property_type": "Residential",
        "location": "Northside",
        "address": "101 Maple Ave, Unit 1",
        "monthly_rent": 5500,
        "tenant": {"name": "Alex Carter", "phone": "555-301-2001", "email": "alex.carter@example.com"},
        "contract_start": date(2024, 3, 1),
    },
    {
        "id": "unit-3",
        "name": "House A - Unit 2",
        "property_type": "Residential",
        "location": "Northside",
        "address": "101 Maple Ave, Unit 2",
        "monthly_rent": 5700,
        "tenant": {"name": "Jamie Lee", "phone": "555-301-2002", "email": "jamie.lee@example.com"},
        "contract_start": date(2024, 2, 15),
    },
    {
        "id": "unit-4",
        "name": "House B - Unit 1",
        "property_type": "Residential",
        "location": "Southside",
        "address": "220 Pine St, Unit 1",
        "monthly_rent": 5200,
        "tenant": {"name": "Morgan Ruiz", "phone": "555-301-3001", "email": "morgan.ruiz@example.com"},
        "contract_start": date(2024, 1, 15),
    },
    {
        "id": "unit-5",
        "name": "House B - Unit 2",
        "property_type": "Residential",
        "location": "Southside",
        "address": "220 Pine St, Unit 2",
        "monthly_rent": 5300,
        "tenant": {"name": "Taylor Smith", "phone": "555-301-3002", "email": "taylor.smith@example.com"},
        "contract_start": date(2024, 5, 1),
    },
]


def sample_expenses(year: int) -> list:
    return [
        {"id": "exp-1", "title": "Property Tax", "amount": 8900, "entry_date": date(year, 1, 5),
         "category": "Tax", "scope": "Global", "recurrence": "Yearly"},
        {"id": "exp-2", "title": "Insurance", "amount": 4400, "entry_date": date(year, 2, 1),
         "category": "Insurance", "scope": "Global", "recurrence": "Yearly"},
        {"id": "exp-3", "title": "HVAC Maintenance", "amount": 220, "entry_date": date(year, 1, 1),
         "category": "Maintenance", "scope": "Global", "recurrence": "Monthly"},
        {"id": "exp-4", "title": "Plumbing Fix - House A Unit 2", "amount": 800, "entry_date": date(year, 3, 15),
         "category": "Plumbing", "scope": "Unit", "unit_id": "unit-3", "recurrence": "One-time"},
        {"id": "exp-5", "title": "Signage Upgrade - Commercial Store", "amount": 1700, "entry_date": date(year, 4, 10),
         "category": "Upgrade", "scope": "Unit", "unit_id": "unit-1", "recurrence": "One-time"},
    ]


async def seed_sample_data(db: AsyncSession, year: Optional[int] = None) -> bool:
    """
    Insert the sample units and expenses if there are no units yet.

    Returns:
        True if data was inserted
    """
    unit_count = await db.scalar(select(func.count()).select_from(Unit))
    if unit_count:
        return False

    year = year or date.today().year
    db.add_all(Unit(**data) for data in SAMPLE_UNITS)
    await db.flush()
    expenses = sample_expenses(year)
    db.add_all(Expense(**data) for data in expenses)
    await db.commit()

    logger.info("Seeded %d sample units and %d expenses", len(SAMPLE_UNITS), len(expenses))
    return True
