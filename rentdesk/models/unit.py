"""
Unit model for rentable units and their current tenant.
"""
from datetime import date, datetime
from typing import Optional
from sqlalchemy import String, DateTime, Date, Float, JSON
from sqlalchemy.orm import Mapped, mapped_column

from rentdesk.database import Base, generate_id, utcnow


class Unit(Base):
    __tablename__ = "units"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: generate_id("unit"),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)  # e.g. 'House A - Unit 1'
    property_type: Mapped[str] = mapped_column(String(20), nullable=False)  # 'Commercial', 'Residential'
    location: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # 'Downtown', 'Northside', 'Southside'
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    monthly_rent: Mapped[float] = mapped_column(Float, nullable=False)
    tenant: Mapped[dict] = mapped_column(JSON, nullable=False)  # {'name', 'phone', 'email'}
    contract_start: Mapped[date] = mapped_column(Date, nullable=False)
    contract_end: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )
