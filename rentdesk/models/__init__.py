"""
SQLAlchemy models for the RentDesk database.
"""
from rentdesk.models.unit import Unit
from rentdesk.models.ledger import Expense, Income
from rentdesk.models.task import Task, TaskReminder, TaskStatus
from rentdesk.models.document import Document
from rentdesk.models.notification import (
    Notification,
    NotificationType,
    PushSubscription,
)

__all__ = [
    "Unit",
    "Expense",
    "Income",
    "Task",
    "TaskReminder",
    "TaskStatus",
    "Document",
    "Notification",
    "NotificationType",
    "PushSubscription",
]
