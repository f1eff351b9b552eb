"""
Tasks endpoints, plus the cron-triggered reminder run.
"""
import logging
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from rentdesk.api.deps import ensure_unit_exists, get_push_service, verify_cron_secret
from rentdesk.database import get_db, utcnow
from rentdesk.models.notification import Notification, NotificationType
from rentdesk.models.task import Task, TaskStatus
from rentdesk.schemas.common import check_scope, update_fields
from rentdesk.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskStatusValue,
    ReminderRunResponse,
    ReminderStatusResponse,
)
from rentdesk.services.notifications import WebPushService
from rentdesk.services.scheduler import (
    NotificationScheduler,
    generate_reminders,
    reschedule_reminders,
    reset_notification_flags,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_task(db: AsyncSession, task_id: str, reload: bool = False) -> Task:
    query = select(Task).options(selectinload(Task.reminders)).where(Task.id == task_id)
    if reload:
        query = query.execution_options(populate_existing=True)

    result = await db.execute(query)
    task = result.scalar_one_or_none()

    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )

    return task


# Reminder run routes come before /{task_id} so "reminders" is not read as an id

@router.post("/reminders", response_model=ReminderRunResponse)
async def run_reminders(
    db: AsyncSession = Depends(get_db),
    push: WebPushService = Depends(get_push_service),
    _: None = Depends(verify_cron_secret),
):
    """
    Process due reminders and due-today tasks.
    Called by an external cron with 'Authorization: Bearer <CRON_SECRET>'.
    """
    started = time.monotonic()
    logger.info("Reminder run started")

    try:
        result = await NotificationScheduler(db, push).process_reminders()
    except Exception:
        logger.exception("Reminder run failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process reminders",
        )

    duration_ms = int((time.monotonic() - started) * 1000)
    logger.info("Reminder run finished in %dms", duration_ms)

    return ReminderRunResponse(
        timestamp=utcnow(),
        duration_ms=duration_ms,
        total_tasks=result.total_tasks,
        active_tasks=result.active_tasks,
        reminders_sent=result.reminders_sent,
        due_notifications_sent=result.due_notifications_sent,
        processed_reminders=result.processed_reminders,
        processed_due_notifications=result.processed_due_notifications,
    )


@router.get("/reminders", response_model=ReminderStatusResponse)
async def get_reminder_status(
    db: AsyncSession = Depends(get_db),
    push: WebPushService = Depends(get_push_service),
):
    """Counts of reminders due in the next 24 hours and of overdue tasks."""
    scheduler = NotificationScheduler(db, push)
    now = utcnow()

    upcoming = await scheduler.get_upcoming_reminders(24, now=now)
    overdue = await scheduler.get_overdue_tasks(now=now)

    return ReminderStatusResponse(
        upcoming_reminders=len(upcoming),
        overdue_tasks=len(overdue),
        timestamp=now,
    )


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    status_filter: Optional[TaskStatusValue] = Query(None, alias="status"),
    unit_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List tasks by due date."""
    query = select(Task).options(selectinload(Task.reminders))

    if status_filter:
        query = query.where(Task.status == status_filter)

    if unit_id:
        query = query.where(Task.unit_id == unit_id)

    query = query.order_by(Task.due_date.asc(), Task.created_at.asc())

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a task with optional reminders (days before the due date)."""
    await ensure_unit_exists(db, task_data.unit_id)

    task = Task(**task_data.model_dump(exclude={"reminder_days"}))
    task.reminders = generate_reminders(task_data.due_date, task_data.reminder_days)

    db.add(task)
    await db.commit()

    logger.info("Created task %s with %d reminders", task.id, len(task.reminders))
    return await _get_task(db, task.id, reload=True)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific task."""
    return await _get_task(db, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a task.

    Completing a task records the completion time and posts a notification;
    reopening it clears that and re-arms its reminders. A new due date moves
    the reminders; new reminder_days replace them.
    """
    task = await _get_task(db, task_id)

    update_data = update_fields(task_data, nullable=("unit_id",))
    reminder_days = update_data.pop("reminder_days", None)
    new_status = update_data.pop("status", None)

    try:
        update_data["unit_id"] = check_scope(
            update_data.get("scope", task.scope),
            update_data.get("unit_id", task.unit_id),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    await ensure_unit_exists(db, update_data["unit_id"])

    due_date_changed = (
        "due_date" in update_data
        and update_data["due_date"] is not None
        and update_data["due_date"] != task.due_date
    )

    for field, value in update_data.items():
        setattr(task, field, value)

    if reminder_days is not None:
        task.reminders = generate_reminders(task.due_date, reminder_days)
    elif due_date_changed:
        reschedule_reminders(task)

    if due_date_changed:
        task.due_notification_sent = False

    if new_status == TaskStatus.COMPLETED and not task.is_completed:
        task.status = TaskStatus.COMPLETED
        task.completed_date = utcnow()
        db.add(
            Notification(
                type=NotificationType.TASK_COMPLETED,
                title=f"Task Completed: {task.title}",
                message=f'Task "{task.title}" has been completed',
                task_id=task.id,
                unit_id=task.unit_id,
                is_read=False,
            )
        )
        logger.info("Task %s completed", task.id)
    elif new_status == TaskStatus.PENDING and task.is_completed:
        task.status = TaskStatus.PENDING
        task.completed_date = None
        reset_notification_flags(task)
        logger.info("Task %s reopened", task.id)

    await db.commit()

    return await _get_task(db, task_id, reload=True)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a task and its reminders."""
    task = await _get_task(db, task_id)

    await db.delete(task)
    await db.commit()
