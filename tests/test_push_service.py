"""
Web push service: payload formatting and fan-out bookkeeping.
"""
from datetime import date
from types import SimpleNamespace

import pytest
from pywebpush import WebPushException
from sqlalchemy import select

from rentdesk.models import PushSubscription, Task
from rentdesk.services.notifications import (
    WebPushService,
    format_due_date,
    task_due_payload,
    task_reminder_payload,
)

TODAY = date(2025, 6, 10)


@pytest.mark.parametrize(
    "due, expected",
    [
        (date(2025, 6, 10), "today"),
        (date(2025, 6, 11), "tomorrow"),
        (date(2025, 6, 17), "in 7 days"),
        (date(2025, 6, 7), "3 days ago"),
    ],
)
def test_format_due_date(due, expected):
    assert format_due_date(due, TODAY) == expected


def test_reminder_payload():
    task = Task(id="task-1", title="Fix roof", due_date=date(2025, 6, 11))

    payload = task_reminder_payload(task, TODAY)

    assert payload["title"] == "Task Reminder"
    assert payload["body"] == '"Fix roof" is due tomorrow'
    assert payload["tag"] == "task-reminder-task-1"
    assert payload["data"] == {"taskId": "task-1", "url": "/tasks"}


def test_due_payload():
    task = Task(id="task-2", title="Pay tax", due_date=TODAY)

    payload = task_due_payload(task)

    assert payload["title"] == "Task Due Today"
    assert payload["body"] == '"Pay tax" is due today!'
    assert payload["tag"] == "task-due-task-2"


def test_vapid_email_gets_mailto_prefix():
    assert WebPushService("key", "ops@example.com").vapid_email == "mailto:ops@example.com"
    assert WebPushService("key", "mailto:ops@example.com").vapid_email == "mailto:ops@example.com"


async def test_unconfigured_service_sends_nothing(monkeypatch):
    def fail(**kwargs):
        raise AssertionError("webpush should not be called")

    monkeypatch.setattr("rentdesk.services.notifications.webpush", fail)
    service = WebPushService(None, "ops@example.com")

    assert not service.is_configured
    assert await service.send_to_all_subscriptions({"title": "x"}, db=None) == {
        "sent": 0,
        "failed": 0,
        "removed": 0,
    }


async def test_expired_subscriptions_are_removed(db_session, monkeypatch):
    for name in ("ok", "gone", "broken"):
        db_session.add(
            PushSubscription(endpoint=f"https://push.example/{name}", p256dh="p", auth="a")
        )
    await db_session.commit()

    calls = []

    def fake_webpush(subscription_info, data, vapid_private_key, vapid_claims, ttl):
        calls.append((subscription_info["endpoint"], vapid_claims["sub"], ttl))
        if subscription_info["endpoint"].endswith("gone"):
            raise WebPushException("gone", response=SimpleNamespace(status_code=410))
        if subscription_info["endpoint"].endswith("broken"):
            raise WebPushException("boom", response=SimpleNamespace(status_code=500))

    monkeypatch.setattr("rentdesk.services.notifications.webpush", fake_webpush)
    service = WebPushService("private-key", "ops@example.com", ttl=60)

    result = await service.send_to_all_subscriptions({"title": "Hello"}, db_session)

    assert result == {"sent": 1, "failed": 1, "removed": 1}
    assert len(calls) == 3
    assert all(sub == "mailto:ops@example.com" and ttl == 60 for _, sub, ttl in calls)

    remaining = (await db_session.execute(select(PushSubscription.endpoint))).scalars().all()
    assert sorted(remaining) == ["https://push.example/broken", "https://push.example/ok"]


async def test_transport_and_key_errors_count_as_failures(db_session, monkeypatch):
    for name in ("ok", "offline", "badkey"):
        db_session.add(
            PushSubscription(endpoint=f"https://push.example/{name}", p256dh="p", auth="a")
        )
    await db_session.commit()

    def fake_webpush(subscription_info, **kwargs):
        if subscription_info["endpoint"].endswith("offline"):
            raise ConnectionError("connection refused")
        if subscription_info["endpoint"].endswith("badkey"):
            raise ValueError("Could not deserialize key data")

    monkeypatch.setattr("rentdesk.services.notifications.webpush", fake_webpush)
    service = WebPushService("private-key", "ops@example.com")

    result = await service.send_to_all_subscriptions({"title": "Hello"}, db_session)

    assert result == {"sent": 1, "failed": 2, "removed": 0}
    remaining = (await db_session.execute(select(PushSubscription.endpoint))).scalars().all()
    assert len(remaining) == 3
