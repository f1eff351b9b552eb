"""
Shared enums and validation helpers.
"""
from typing import Iterable, Literal, Optional

from pydantic import BaseModel

Scope = Literal["Global", "Unit"]
Recurrence = Literal["One-time", "Monthly", "Yearly"]


def check_scope(scope: Optional[str], unit_id: Optional[str]) -> Optional[str]:
    """
    Enforce the scope/unit rule and return the unit_id to store.

    Unit-scoped records need a unit_id; global records never keep one.
    """
    if scope == "Unit":
        if not unit_id:
            raise ValueError("unit_id is required when scope is Unit")
        return unit_id
    return None


def update_fields(data: BaseModel, nullable: Iterable[str] = ()) -> dict:
    """Fields the client sent, minus explicit nulls for columns that cannot be null."""
    keep = set(nullable)
    return {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in keep
    }
