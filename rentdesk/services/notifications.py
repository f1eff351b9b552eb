"""
Web push notification service using the Web Push protocol (VAPID).
"""
import asyncio
import json
import logging
from datetime import date
from typing import Any, Dict, Optional

from pywebpush import WebPushException, webpush
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentdesk.config import settings
from rentdesk.models.notification import PushSubscription
from rentdesk.models.task import Task

logger = logging.getLogger(__name__)

# Push services answer 404/410 once a browser subscription is gone for good
_EXPIRED_STATUS_CODES = (404, 410)


def format_due_date(due_date: date, today: date) -> str:
    """Human phrase for how far away a due date is, e.g. 'tomorrow' or '3 days ago'."""
    diff_days = (due_date - today).days

    if diff_days == 0:
        return "today"
    if diff_days == 1:
        return "tomorrow"
    if diff_days > 0:
        return f"in {diff_days} days"
    return f"{abs(diff_days)} days ago"


def task_reminder_payload(task: Task, today: date) -> Dict[str, Any]:
    return {
        "title": "Task Reminder",
        "body": f'"{task.title}" is due {format_due_date(task.due_date, today)}',
        "icon": "/icon.svg",
        "badge": "/icon.svg",
        "tag": f"task-reminder-{task.id}",
        "data": {"taskId": task.id, "url": "/tasks"},
    }


def task_due_payload(task: Task) -> Dict[str, Any]:
    return {
        "title": "Task Due Today",
        "body": f'"{task.title}" is due today!',
        "icon": "/icon.svg",
        "badge": "/icon.svg",
        "tag": f"task-due-{task.id}",
        "data": {"taskId": task.id, "url": "/tasks"},
    }


class WebPushService:
    """
    Web Push integration.
    Fans a JSON payload out to every stored browser subscription.
    """

    def __init__(
        self,
        vapid_private_key: Optional[str],
        vapid_email: str,
        ttl: int = 86400,
    ):
        self.vapid_private_key = vapid_private_key
        # The 'sub' claim must be a mailto: or https: URI
        if not vapid_email.startswith(("mailto:", "https:")):
            vapid_email = f"mailto:{vapid_email}"
        self.vapid_email = vapid_email
        self.ttl = ttl

    @property
    def is_configured(self) -> bool:
        return bool(self.vapid_private_key)

    async def send_notification(
        self,
        subscription: PushSubscription,
        payload: Dict[str, Any],
    ) -> str:
        """
        Send one payload to one subscription.

        Returns:
            'sent', 'failed', or 'expired' (the subscription should be dropped)
        """
        try:
            # webpush() is blocking (requests); keep it off the event loop
            await asyncio.to_thread(
                webpush,
                subscription_info=subscription.to_subscription_info(),
                data=json.dumps(payload),
                vapid_private_key=self.vapid_private_key,
                vapid_claims={"sub": self.vapid_email},
                ttl=self.ttl,
            )
            return "sent"
        except WebPushException as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code in _EXPIRED_STATUS_CODES:
                logger.info("Push subscription expired endpoint=%s", subscription.endpoint)
                return "expired"
            logger.warning(
                "Push send failed endpoint=%s status=%s: %s",
                subscription.endpoint,
                status_code,
                e,
            )
            return "failed"
        except Exception:
            # Network errors and unusable keys
            logger.exception("Push send error endpoint=%s", subscription.endpoint)
            return "failed"

    async def send_to_all_subscriptions(
        self,
        payload: Dict[str, Any],
        db: AsyncSession,
    ) -> Dict[str, int]:
        """
        Send a payload to every stored subscription.

        Best-effort: failures are logged and counted, never retried.
        Expired subscriptions are deleted.

        Returns:
            Counts of sent, failed and removed subscriptions
        """
        result = {"sent": 0, "failed": 0, "removed": 0}

        if not self.is_configured:
            logger.debug("VAPID keys not configured; skipping push '%s'", payload.get("title"))
            return result

        subscriptions = (await db.execute(select(PushSubscription))).scalars().all()

        if not subscriptions:
            return result

        outcomes = await asyncio.gather(
            *(self.send_notification(sub, payload) for sub in subscriptions)
        )

        for sub, outcome in zip(subscriptions, outcomes):
            if outcome == "sent":
                result["sent"] += 1
            elif outcome == "expired":
                await db.delete(sub)
                result["removed"] += 1
            else:
                result["failed"] += 1

        if result["removed"]:
            await db.commit()

        logger.info(
            "Push '%s' sent=%d failed=%d removed=%d",
            payload.get("title"),
            result["sent"],
            result["failed"],
            result["removed"],
        )
        return result

    async def send_task_reminder(
        self,
        task: Task,
        today: date,
        db: AsyncSession,
    ) -> Dict[str, int]:
        return await self.send_to_all_subscriptions(task_reminder_payload(task, today), db)

    async def send_task_due(self, task: Task, db: AsyncSession) -> Dict[str, int]:
        return await self.send_to_all_subscriptions(task_due_payload(task), db)


push_service = WebPushService(
    vapid_private_key=settings.vapid_private_key,
    vapid_email=settings.vapid_email,
    ttl=settings.push_ttl_seconds,
)
