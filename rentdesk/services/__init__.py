"""
Service layer: push delivery, reminder scheduling, document storage, ledger stats.
"""
from rentdesk.services.notifications import WebPushService
from rentdesk.services.scheduler import NotificationScheduler, ReminderRunResult
from rentdesk.services.storage import DocumentStorage
from rentdesk.services.ledger import compute_expense_stats

__all__ = [
    "WebPushService",
    "NotificationScheduler",
    "ReminderRunResult",
    "DocumentStorage",
    "compute_expense_stats",
]
