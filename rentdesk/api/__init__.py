"""
API routers for RentDesk.
"""
from rentdesk.api import units, expenses, income, documents
from rentdesk.api import tasks, cron, notifications, push

__all__ = [
    "units",
    "expenses",
    "income",
    "documents",
    "tasks",
    "cron",
    "notifications",
    "push",
]
