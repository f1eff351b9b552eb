"""
Reminder scheduler: firing rules, idempotence, failure isolation, status queries.
"""
import asyncio
from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import select

from rentdesk.database import utcnow
from rentdesk.models import Notification, NotificationType, PushSubscription, Task, TaskStatus
from rentdesk.services.notifications import WebPushService
from rentdesk.services.scheduler import (
    NotificationScheduler,
    generate_reminders,
    reminder_period,
    reschedule_reminders,
    reset_notification_flags,
    run_reminder_loop,
)

NOW = datetime(2025, 6, 10, 9, 0)
TODAY = NOW.date()


async def make_task(db, title, due, reminder_days=(), status=TaskStatus.PENDING):
    task = Task(
        title=title,
        category="Maintenance",
        priority="High",
        scope="Global",
        due_date=due,
        status=status,
    )
    task.reminders = generate_reminders(due, reminder_days, "UTC")
    db.add(task)
    await db.commit()
    return task


def scheduler(db, push, **kwargs):
    kwargs.setdefault("due_notification_once", False)
    return NotificationScheduler(db, push, tz_name="UTC", **kwargs)


async def notifications(db):
    result = await db.execute(select(Notification).order_by(Notification.created_at))
    return result.scalars().all()


async def test_reminder_fires_once(db_session, push):
    task = await make_task(db_session, "Fix roof", TODAY + timedelta(days=1), [1])

    first = await scheduler(db_session, push).process_reminders(now=NOW)

    assert first.reminders_sent == 1
    assert first.processed_reminders == ["Fix roof (1_day)"]
    assert push.reminders == [task.id]
    assert task.reminders[0].notification_sent is True

    second = await scheduler(db_session, push).process_reminders(now=NOW + timedelta(minutes=1))

    assert second.reminders_sent == 0
    assert push.reminders == [task.id]

    stored = await notifications(db_session)
    assert len(stored) == 1
    assert stored[0].type == NotificationType.TASK_REMINDER
    assert stored[0].title == "Task Reminder: Fix roof"
    assert stored[0].message == 'Task "Fix roof" is due in 1 day'
    assert stored[0].task_id == task.id


async def test_future_reminder_waits(db_session, push):
    await make_task(db_session, "Inspect boiler", TODAY + timedelta(days=10), [7])

    result = await scheduler(db_session, push).process_reminders(now=NOW)

    assert result.reminders_sent == 0
    assert push.reminders == []


async def test_plural_days_in_message(db_session, push):
    await make_task(db_session, "Renew lease", TODAY + timedelta(days=2), [2])

    await scheduler(db_session, push).process_reminders(now=NOW)

    stored = await notifications(db_session)
    assert stored[0].message == 'Task "Renew lease" is due in 2 days'


async def test_completed_tasks_are_skipped(db_session, push):
    await make_task(db_session, "Done", TODAY, [1], status=TaskStatus.COMPLETED)

    result = await scheduler(db_session, push).process_reminders(now=NOW)

    assert result.total_tasks == 1
    assert result.active_tasks == 0
    assert result.reminders_sent == 0
    assert result.due_notifications_sent == 0
    assert push.reminders == [] and push.due == []


async def test_due_today_repeats_every_run_by_default(db_session, push):
    task = await make_task(db_session, "Pay tax", TODAY)

    for _ in range(2):
        result = await scheduler(db_session, push).process_reminders(now=NOW)
        assert result.due_notifications_sent == 1
        assert result.processed_due_notifications == ["Pay tax"]

    assert push.due == [task.id, task.id]
    stored = await notifications(db_session)
    assert [n.type for n in stored] == [NotificationType.TASK_OVERDUE] * 2
    assert stored[0].title == "Task Overdue: Pay tax"
    assert stored[0].message == 'Task "Pay tax" is now overdue and needs immediate attention'


async def test_due_today_once_when_deduplicated(db_session, push):
    task = await make_task(db_session, "Pay tax", TODAY)

    first = await scheduler(db_session, push, due_notification_once=True).process_reminders(now=NOW)
    second = await scheduler(db_session, push, due_notification_once=True).process_reminders(now=NOW)

    assert first.due_notifications_sent == 1
    assert second.due_notifications_sent == 0
    assert push.due == [task.id]
    assert task.due_notification_sent is True


async def test_due_date_uses_configured_timezone(db_session, push):
    # 02:00 UTC on the 11th is still the 10th in New York
    await make_task(db_session, "Local due", date(2025, 6, 10))

    result = await NotificationScheduler(
        db_session, push, tz_name="America/New_York", due_notification_once=False
    ).process_reminders(now=datetime(2025, 6, 11, 2, 0))

    assert result.due_notifications_sent == 1


async def test_failure_on_one_task_does_not_stop_the_pass(db_session, push):
    broken = await make_task(db_session, "Broken", TODAY + timedelta(days=1), [1])
    healthy = await make_task(db_session, "Healthy", TODAY + timedelta(days=1), [1])
    push.fail_for.add(broken.id)

    result = await scheduler(db_session, push).process_reminders(now=NOW)

    assert result.reminders_sent == 1
    assert result.processed_reminders == ["Healthy (1_day)"]
    assert broken.reminders[0].notification_sent is False
    assert healthy.reminders[0].notification_sent is True

    # The failed reminder is retried on the next pass
    push.fail_for.clear()
    retry = await scheduler(db_session, push).process_reminders(now=NOW)
    assert retry.processed_reminders == ["Broken (1_day)"]


async def test_reminder_flagged_when_some_subscriptions_fail(db_session, monkeypatch):
    for name in ("ok", "down"):
        db_session.add(
            PushSubscription(endpoint=f"https://push.example/{name}", p256dh="p", auth="a")
        )
    task = await make_task(db_session, "Fix roof", TODAY + timedelta(days=1), [1])

    calls = []

    def fake_webpush(subscription_info, **kwargs):
        calls.append(subscription_info["endpoint"])
        if subscription_info["endpoint"].endswith("down"):
            raise ConnectionError("network unreachable")

    monkeypatch.setattr("rentdesk.services.notifications.webpush", fake_webpush)
    push = WebPushService("private-key", "ops@example.com")

    first = await scheduler(db_session, push).process_reminders(now=NOW)
    assert first.reminders_sent == 1
    assert task.reminders[0].notification_sent is True

    for minutes in (1, 2):
        later = await scheduler(db_session, push).process_reminders(now=NOW + timedelta(minutes=minutes))
        assert later.reminders_sent == 0

    assert sorted(calls) == ["https://push.example/down", "https://push.example/ok"]
    assert len(await notifications(db_session)) == 1


async def test_upcoming_and_overdue_queries(db_session, push):
    soon = await make_task(db_session, "Soon", TODAY + timedelta(days=2), [1])
    await make_task(db_session, "Later", TODAY + timedelta(days=30), [7])
    late = await make_task(db_session, "Late", TODAY - timedelta(days=3))
    await make_task(db_session, "Late but done", TODAY - timedelta(days=3), status=TaskStatus.COMPLETED)

    s = scheduler(db_session, push)
    upcoming = await s.get_upcoming_reminders(24, now=NOW)
    overdue = await s.get_overdue_tasks(now=NOW)

    assert [t.id for t in upcoming] == [soon.id]
    assert [t.id for t in overdue] == [late.id]


def test_generate_reminders_drops_duplicates():
    due = date(2025, 6, 11)

    reminders = generate_reminders(due, [1, 7, 1, 3], "UTC")

    assert [r.days_before for r in reminders] == [7, 3, 1]
    assert [r.period for r in reminders] == ["1_week", "custom", "1_day"]
    assert reminders[-1].scheduled_for == datetime(2025, 6, 10, 0, 0)
    assert not any(r.notification_sent for r in reminders)


def test_generate_reminders_local_midnight():
    reminders = generate_reminders(date(2025, 6, 11), [1], "America/New_York")

    # Midnight EDT is 04:00 UTC
    assert reminders[0].scheduled_for == datetime(2025, 6, 10, 4, 0)


@pytest.mark.parametrize(
    "days, period",
    [(1, "1_day"), (2, "2_days"), (7, "1_week"), (3, "custom"), (14, "custom")],
)
def test_reminder_period(days, period):
    assert reminder_period(days) == period


def test_reschedule_and_reset():
    task = Task(title="Move", due_date=date(2025, 6, 20), due_notification_sent=True)
    task.reminders = generate_reminders(date(2025, 6, 11), [2], "UTC")
    task.reminders[0].notification_sent = True

    reschedule_reminders(task, "UTC")

    assert task.reminders[0].scheduled_for == datetime(2025, 6, 18, 0, 0)
    assert task.reminders[0].notification_sent is False

    task.reminders[0].notification_sent = True
    reset_notification_flags(task)

    assert task.reminders[0].notification_sent is False
    assert task.due_notification_sent is False


async def test_reminder_loop_runs_a_pass_then_cancels(db_session, session_factory, push):
    task = await make_task(db_session, "Due now", utcnow().date())

    loop_task = asyncio.create_task(
        run_reminder_loop(session_factory, push, interval_minutes=60)
    )
    for _ in range(100):
        if push.due:
            break
        await asyncio.sleep(0.01)

    loop_task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await loop_task

    assert push.due == [task.id]
