"""
Shared endpoint dependencies.
"""
import hmac
import logging
from typing import Optional

from fastapi import Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentdesk.config import settings
from rentdesk.models.unit import Unit
from rentdesk.services.notifications import WebPushService, push_service
from rentdesk.services.storage import DocumentStorage, document_storage

logger = logging.getLogger(__name__)


def get_push_service() -> WebPushService:
    return push_service


def get_document_storage() -> DocumentStorage:
    return document_storage


async def verify_cron_secret(authorization: Optional[str] = Header(None)) -> None:
    """Require 'Authorization: Bearer <CRON_SECRET>'."""
    expected = f"Bearer {settings.cron_secret}"
    if not authorization or not hmac.compare_digest(authorization.encode(), expected.encode()):
        logger.warning("Unauthorized cron attempt (header present: %s)", bool(authorization))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


async def ensure_unit_exists(db: AsyncSession, unit_id: Optional[str]) -> None:
    """404 if a unit-scoped record points at a unit that does not exist."""
    if unit_id and await db.get(Unit, unit_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unit not found",
        )
