"""
Web push subscription endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from rentdesk.api.deps import get_push_service
from rentdesk.config import settings
from rentdesk.database import get_db
from rentdesk.models.notification import PushSubscription
from rentdesk.schemas.notification import (
    PushSubscribeRequest,
    PushUnsubscribeRequest,
    PushSubscriptionResponse,
    PushTestRequest,
    PushSendResult,
)
from rentdesk.services.notifications import WebPushService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/vapid-public-key")
async def get_vapid_public_key():
    """Application server key for PushManager.subscribe()."""
    if not settings.vapid_public_key:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Push notifications are not configured",
        )

    return {"public_key": settings.vapid_public_key}


@router.post("/subscribe", response_model=PushSubscriptionResponse)
async def subscribe(
    request: PushSubscribeRequest,
    db: AsyncSession = Depends(get_db),
):
    """Store a browser push subscription, refreshing keys if it already exists."""
    data = request.subscription

    result = await db.execute(
        select(PushSubscription).where(PushSubscription.endpoint == data.endpoint)
    )
    subscription = result.scalar_one_or_none()

    if subscription:
        subscription.p256dh = data.keys.p256dh
        subscription.auth = data.keys.auth
        logger.info("Push subscription refreshed id=%s", subscription.id)
    else:
        subscription = PushSubscription(
            endpoint=data.endpoint,
            p256dh=data.keys.p256dh,
            auth=data.keys.auth,
        )
        db.add(subscription)
        logger.info("Push subscription added")

    await db.commit()
    await db.refresh(subscription)

    return subscription


@router.post("/unsubscribe")
async def unsubscribe(
    request: PushUnsubscribeRequest,
    db: AsyncSession = Depends(get_db),
):
    """Remove a push subscription by endpoint."""
    result = await db.execute(
        select(PushSubscription).where(PushSubscription.endpoint == request.endpoint)
    )
    subscription = result.scalar_one_or_none()

    if not subscription:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Subscription not found",
        )

    await db.delete(subscription)
    await db.commit()

    return {"message": "Unsubscribed"}


@router.post("/test", response_model=PushSendResult)
async def send_test_push(
    request: PushTestRequest,
    db: AsyncSession = Depends(get_db),
    push: WebPushService = Depends(get_push_service),
):
    """Send a test notification to every subscription."""
    if not push.is_configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Push notifications are not configured",
        )

    counts = await push.send_to_all_subscriptions(
        {
            "title": request.title,
            "body": request.body,
            "icon": "/icon.svg",
            "badge": "/icon.svg",
            "tag": "test-notification",
            "data": {"url": request.url},
        },
        db,
    )

    return PushSendResult(**counts)
