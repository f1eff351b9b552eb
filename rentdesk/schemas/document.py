"""
Document schemas.
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from rentdesk.schemas.common import Scope

DocumentType = Literal[
    "Contract",
    "Insurance",
    "Maintenance",
    "Tax",
    "Invoice",
    "Receipt",
    "Other",
]


class DocumentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[DocumentType] = None
    scope: Optional[Scope] = None
    unit_id: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None


class DocumentResponse(BaseModel):
    id: str
    name: str
    original_name: str
    type: str
    mime_type: str
    size: int
    upload_date: datetime
    scope: str
    unit_id: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []

    class Config:
        from_attributes = True


class DocumentTagsResponse(BaseModel):
    tags: List[str]
