"""
Unit schemas.
"""
from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field

PropertyType = Literal["Commercial", "Residential"]
Location = Literal["Downtown", "Northside", "Southside"]


class Tenant(BaseModel):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None


class UnitCreate(BaseModel):
    id: Optional[str] = Field(None, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    property_type: PropertyType
    location: Optional[Location] = None
    address: str = Field(..., min_length=1)
    monthly_rent: float = Field(..., gt=0)
    tenant: Tenant
    contract_start: date
    contract_end: Optional[date] = None


class UnitUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    property_type: Optional[PropertyType] = None
    location: Optional[Location] = None
    address: Optional[str] = None
    monthly_rent: Optional[float] = Field(None, gt=0)
    tenant: Optional[Tenant] = None
    contract_start: Optional[date] = None
    contract_end: Optional[date] = None


class UnitResponse(BaseModel):
    id: str
    name: str
    property_type: str
    location: Optional[str] = None
    address: str
    monthly_rent: float
    tenant: Tenant
    contract_start: date
    contract_end: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
