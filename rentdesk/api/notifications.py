"""
In-app notifications endpoints.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from rentdesk.database import get_db
from rentdesk.models.notification import Notification
from rentdesk.schemas.notification import NotificationCreate, NotificationResponse

router = APIRouter()


async def _get_notification(db: AsyncSession, notification_id: str) -> Notification:
    notification = await db.get(Notification, notification_id)

    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )

    return notification


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    unread_only: bool = False,
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """List notifications, newest first."""
    query = select(Notification)

    if unread_only:
        query = query.where(Notification.is_read == False)

    query = query.order_by(Notification.created_at.desc()).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    notification_data: NotificationCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a notification."""
    notification = Notification(**notification_data.model_dump())

    db.add(notification)
    await db.commit()
    await db.refresh(notification)

    return notification


@router.put("/read-all")
async def mark_all_read(db: AsyncSession = Depends(get_db)):
    """Mark every notification as read."""
    result = await db.execute(
        update(Notification)
        .where(Notification.is_read == False)
        .values(is_read=True)
    )
    await db.commit()

    return {"message": "All notifications marked as read", "updated": result.rowcount}


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Mark a notification as read."""
    notification = await _get_notification(db, notification_id)

    notification.is_read = True
    await db.commit()
    await db.refresh(notification)

    return notification


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a notification."""
    notification = await _get_notification(db, notification_id)

    await db.delete(notification)
    await db.commit()
