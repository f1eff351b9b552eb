"""
Task reminder scheduler.

Each pass scans every task and:
- fires a push + in-app notification for each reminder whose time has come
  and that has not been sent yet, then flags it as sent,
- fires a due notification for each open task due today.

All state lives in the persisted flags, so running a pass twice in a row is
harmless; nothing here locks, so two overlapping passes may both send.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from rentdesk.config import settings
from rentdesk.database import utcnow
from rentdesk.models.notification import Notification, NotificationType
from rentdesk.models.task import Task, TaskReminder
from rentdesk.services.notifications import WebPushService

logger = logging.getLogger(__name__)

_PERIODS = {1: "1_day", 2: "2_days", 7: "1_week"}


def reminder_period(days: int) -> str:
    return _PERIODS.get(days, "custom")


def local_today(now: datetime, tz_name: str) -> date:
    """Calendar date of a naive-UTC instant in the given timezone."""
    return now.replace(tzinfo=timezone.utc).astimezone(ZoneInfo(tz_name)).date()


def reminder_time(due_date: date, days_before: int, tz_name: str) -> datetime:
    """Naive-UTC instant of local midnight, days_before days ahead of due_date."""
    local_midnight = datetime.combine(
        due_date - timedelta(days=days_before),
        time.min,
        tzinfo=ZoneInfo(tz_name),
    )
    return local_midnight.astimezone(timezone.utc).replace(tzinfo=None)


def generate_reminders(
    due_date: date,
    reminder_days: Iterable[int],
    tz_name: Optional[str] = None,
) -> List[TaskReminder]:
    """Build unsent reminders, one per distinct day offset."""
    tz_name = tz_name or settings.timezone
    reminders = []
    for days in sorted(set(reminder_days), reverse=True):
        reminders.append(
            TaskReminder(
                period=reminder_period(days),
                days_before=days,
                scheduled_for=reminder_time(due_date, days, tz_name),
                notification_sent=False,
            )
        )
    return reminders


def reschedule_reminders(task: Task, tz_name: Optional[str] = None) -> None:
    """Move every reminder to match the task's due date and clear its flag."""
    tz_name = tz_name or settings.timezone
    for reminder in task.reminders:
        reminder.scheduled_for = reminder_time(task.due_date, reminder.days_before, tz_name)
        reminder.notification_sent = False


def reset_notification_flags(task: Task) -> None:
    for reminder in task.reminders:
        reminder.notification_sent = False
    task.due_notification_sent = False


@dataclass
class ReminderRunResult:
    total_tasks: int = 0
    active_tasks: int = 0
    reminders_sent: int = 0
    due_notifications_sent: int = 0
    processed_reminders: List[str] = field(default_factory=list)
    processed_due_notifications: List[str] = field(default_factory=list)


class NotificationScheduler:
    """
    Scans tasks for due reminders and due dates.
    One instance per session; the session is committed after each sent reminder.
    """

    def __init__(
        self,
        db: AsyncSession,
        push: WebPushService,
        tz_name: Optional[str] = None,
        due_notification_once: Optional[bool] = None,
    ):
        self.db = db
        self.push = push
        self.tz_name = tz_name or settings.timezone
        self.due_notification_once = (
            settings.due_notification_once
            if due_notification_once is None
            else due_notification_once
        )

    async def _load_tasks(self, populate_existing: bool = False) -> List[Task]:
        query = select(Task).options(selectinload(Task.reminders)).order_by(Task.due_date)
        if populate_existing:
            query = query.execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def _recover(self) -> None:
        # Rollback expires every loaded instance; reload them in place
        await self.db.rollback()
        await self._load_tasks(populate_existing=True)

    async def process_reminders(self, now: Optional[datetime] = None) -> ReminderRunResult:
        """
        Run one reminder pass.

        Args:
            now: Naive UTC instant to evaluate against (defaults to the clock)

        Returns:
            Counts and labels of what was sent
        """
        now = now or utcnow()
        today = local_today(now, self.tz_name)
        result = ReminderRunResult()

        tasks = await self._load_tasks()
        result.total_tasks = len(tasks)
        logger.info("Processing %d total tasks", len(tasks))

        for task in tasks:
            if task.is_completed:
                continue

            result.active_tasks += 1

            for reminder in list(task.reminders):
                if reminder.scheduled_for <= now and not reminder.notification_sent:
                    label = f"{task.title} ({reminder.period})"
                    logger.info("Sending reminder for task %s: %s (due %s)", task.id, label, task.due_date)
                    if await self._send_task_reminder(task, reminder, today):
                        result.reminders_sent += 1
                        result.processed_reminders.append(label)

            if task.due_date == today:
                if self.due_notification_once and task.due_notification_sent:
                    continue
                logger.info("Sending due notification for task %s: %s", task.id, task.title)
                if await self._send_task_due_notification(task):
                    result.due_notifications_sent += 1
                    result.processed_due_notifications.append(task.title)

        logger.info(
            "Reminder processing complete total=%d active=%d reminders_sent=%d due_sent=%d",
            result.total_tasks,
            result.active_tasks,
            result.reminders_sent,
            result.due_notifications_sent,
        )
        return result

    async def _send_task_reminder(
        self,
        task: Task,
        reminder: TaskReminder,
        today: date,
    ) -> bool:
        task_id = task.id
        try:
            await self.push.send_task_reminder(task, today, self.db)

            days = reminder.days_before
            self.db.add(
                Notification(
                    type=NotificationType.TASK_REMINDER,
                    title=f"Task Reminder: {task.title}",
                    message=f'Task "{task.title}" is due in {days} day{"s" if days != 1 else ""}',
                    task_id=task.id,
                    unit_id=task.unit_id,
                    is_read=False,
                )
            )
            reminder.notification_sent = True
            await self.db.commit()
            return True
        except Exception:
            logger.exception("Error sending reminder for task %s", task_id)
            await self._recover()
            return False

    async def _send_task_due_notification(self, task: Task) -> bool:
        task_id = task.id
        try:
            await self.push.send_task_due(task, self.db)

            self.db.add(
                Notification(
                    type=NotificationType.TASK_OVERDUE,
                    title=f"Task Overdue: {task.title}",
                    message=f'Task "{task.title}" is now overdue and needs immediate attention',
                    task_id=task.id,
                    unit_id=task.unit_id,
                    is_read=False,
                )
            )
            task.due_notification_sent = True
            await self.db.commit()
            return True
        except Exception:
            logger.exception("Error sending due notification for task %s", task_id)
            await self._recover()
            return False

    async def get_upcoming_reminders(
        self,
        hours_ahead: int = 24,
        now: Optional[datetime] = None,
    ) -> List[Task]:
        """Open tasks with an unsent reminder scheduled within the next hours_ahead hours."""
        now = now or utcnow()
        horizon = now + timedelta(hours=hours_ahead)

        return [
            task
            for task in await self._load_tasks()
            if not task.is_completed
            and any(
                now <= r.scheduled_for <= horizon and not r.notification_sent
                for r in task.reminders
            )
        ]

    async def get_overdue_tasks(self, now: Optional[datetime] = None) -> List[Task]:
        """Open tasks whose due date has passed."""
        today = local_today(now or utcnow(), self.tz_name)

        return [
            task
            for task in await self._load_tasks()
            if not task.is_completed and task.due_date < today
        ]


async def run_reminder_loop(
    session_factory: async_sessionmaker,
    push: WebPushService,
    *,
    interval_minutes: float = 15.0,
) -> None:
    """
    In-process alternative to an external cron.

    Runs one pass immediately, then every interval_minutes.
    To stop the loop, cancel the coroutine/task.
    """
    sleep_s = max(1.0, float(interval_minutes) * 60)
    logger.info("Reminder loop started interval=%.0fs", sleep_s)

    while True:
        try:
            async with session_factory() as db:
                await NotificationScheduler(db, push).process_reminders()
        except Exception:
            logger.exception("Reminder pass failed")

        await asyncio.sleep(sleep_s)
