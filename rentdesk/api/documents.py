"""
Documents endpoints - upload, tag, and download files.
"""
import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query, UploadFile, File, Form
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from rentdesk.api.deps import ensure_unit_exists, get_document_storage
from rentdesk.database import get_db, generate_id
from rentdesk.models.document import Document
from rentdesk.schemas.common import Scope, check_scope, update_fields
from rentdesk.schemas.document import (
    DocumentType,
    DocumentUpdate,
    DocumentResponse,
    DocumentTagsResponse,
)
from rentdesk.services.storage import DocumentStorage, safe_filename

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_tags(raw: Optional[str]) -> List[str]:
    """Split a comma-separated tag string, dropping blanks and duplicates."""
    tags = []
    for tag in (raw or "").split(","):
        tag = tag.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


async def _get_document(db: AsyncSession, document_id: str) -> Document:
    document = await db.get(Document, document_id)

    if not document:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )

    return document


@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    unit_id: Optional[str] = Query(None),
    scope: Optional[Literal["global"]] = Query(None),
    type: Optional[DocumentType] = Query(None),
    tags: Optional[str] = Query(None, description="Comma-separated; matches any"),
    db: AsyncSession = Depends(get_db),
):
    """List documents, newest upload first."""
    query = select(Document)

    if unit_id:
        query = query.where(Document.scope == "Unit", Document.unit_id == unit_id)
    elif scope == "global":
        query = query.where(Document.scope == "Global")

    if type:
        query = query.where(Document.type == type)

    query = query.order_by(Document.upload_date.desc())

    result = await db.execute(query)
    documents = result.scalars().all()

    # JSON columns are not portably searchable; filter tags here
    wanted = {t.lower() for t in parse_tags(tags)}
    if wanted:
        documents = [
            d for d in documents
            if wanted & {t.lower() for t in (d.tags or [])}
        ]

    return documents


@router.get("/tags", response_model=DocumentTagsResponse)
async def list_document_tags(db: AsyncSession = Depends(get_db)):
    """All tags in use, lower-cased and sorted."""
    result = await db.execute(select(Document.tags))

    tags = set()
    for row_tags in result.scalars().all():
        tags.update(t.lower() for t in (row_tags or []))

    return DocumentTagsResponse(tags=sorted(tags))


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile = File(...),
    type: DocumentType = Form(...),
    scope: Scope = Form(...),
    name: Optional[str] = Form(None),
    unit_id: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """
    Upload a document.
    Accepts multipart/form-data; tags are comma-separated.
    """
    try:
        unit_id = check_scope(scope, unit_id or None)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    await ensure_unit_exists(db, unit_id)

    original_name = file.filename or "file"
    document_id = generate_id("doc")
    storage_key = f"{document_id}-{safe_filename(original_name)}"

    size = await storage.save(storage_key, file)

    document = Document(
        id=document_id,
        name=(name or "").strip() or original_name,
        original_name=original_name,
        type=type,
        mime_type=file.content_type or "application/octet-stream",
        size=size,
        scope=scope,
        unit_id=unit_id,
        storage_key=storage_key,
        description=description,
        tags=parse_tags(tags),
    )

    db.add(document)
    try:
        await db.commit()
    except Exception:
        # Don't leave an orphaned file behind
        await storage.delete(storage_key)
        raise
    await db.refresh(document)

    return document


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get document metadata."""
    return await _get_document(db, document_id)


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    download: bool = Query(False, description="Force a download instead of inline display"),
    db: AsyncSession = Depends(get_db),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """Stream the stored file."""
    document = await _get_document(db, document_id)

    if not await storage.exists(document.storage_key):
        logger.error("Stored file missing for document %s key=%s", document.id, document.storage_key)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found",
        )

    return FileResponse(
        storage.path(document.storage_key),
        media_type=document.mime_type,
        filename=document.original_name,
        content_disposition_type="attachment" if download else "inline",
    )


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    document_data: DocumentUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update document metadata. The file itself is immutable."""
    document = await _get_document(db, document_id)

    update_data = update_fields(document_data, nullable=("unit_id", "description"))
    try:
        update_data["unit_id"] = check_scope(
            update_data.get("scope", document.scope),
            update_data.get("unit_id", document.unit_id),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    await ensure_unit_exists(db, update_data["unit_id"])

    if "tags" in update_data:
        update_data["tags"] = parse_tags(",".join(update_data["tags"] or []))

    for field, value in update_data.items():
        setattr(document, field, value)

    await db.commit()
    await db.refresh(document)

    return document


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """Delete a document and its stored file."""
    document = await _get_document(db, document_id)
    storage_key = document.storage_key

    await db.delete(document)
    await db.commit()

    try:
        await storage.delete(storage_key)
    except OSError:
        logger.exception("Failed to remove stored file for document %s", document_id)
