"""
Cron health endpoint.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rentdesk.api.deps import get_push_service
from rentdesk.config import settings
from rentdesk.database import get_db, utcnow
from rentdesk.schemas.task import (
    CronInfo,
    CronStats,
    CronStatusResponse,
    OverdueTaskSummary,
    UpcomingTaskSummary,
)
from rentdesk.services.notifications import WebPushService
from rentdesk.services.scheduler import NotificationScheduler, local_today

router = APIRouter()


def _schedule_description() -> str:
    if settings.reminder_interval_minutes:
        return f"Every {settings.reminder_interval_minutes} minutes (in-process)"
    return "External cron"


@router.get("/status", response_model=CronStatusResponse)
async def get_cron_status(
    db: AsyncSession = Depends(get_db),
    push: WebPushService = Depends(get_push_service),
):
    """Summary of pending reminder work for monitoring."""
    scheduler = NotificationScheduler(db, push)
    now = utcnow()
    today = local_today(now, scheduler.tz_name)

    upcoming = await scheduler.get_upcoming_reminders(24, now=now)
    overdue = await scheduler.get_overdue_tasks(now=now)

    return CronStatusResponse(
        status="healthy",
        timestamp=now,
        stats=CronStats(
            upcoming_reminders=len(upcoming),
            overdue_tasks=len(overdue),
            next_reminders=[
                UpcomingTaskSummary(
                    id=task.id,
                    title=task.title,
                    due_date=task.due_date,
                    pending_reminders=sum(
                        1 for r in task.reminders if not r.notification_sent
                    ),
                )
                for task in upcoming[:5]
            ],
            overdue_task_titles=[
                OverdueTaskSummary(
                    id=task.id,
                    title=task.title,
                    due_date=task.due_date,
                    days_overdue=(today - task.due_date).days,
                )
                for task in overdue[:5]
            ],
        ),
        cron_info=CronInfo(
            schedule=_schedule_description(),
            endpoint="/api/tasks/reminders",
        ),
    )
