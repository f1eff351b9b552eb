"""
Pydantic schemas for API request/response validation.
"""
from rentdesk.schemas.unit import (
    Tenant,
    UnitCreate,
    UnitUpdate,
    UnitResponse,
)
from rentdesk.schemas.ledger import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseStats,
    IncomeCreate,
    IncomeUpdate,
    IncomeResponse,
)
from rentdesk.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskReminderResponse,
    ReminderRunResponse,
    ReminderStatusResponse,
    CronStatusResponse,
)
from rentdesk.schemas.document import (
    DocumentUpdate,
    DocumentResponse,
    DocumentTagsResponse,
)
from rentdesk.schemas.notification import (
    NotificationCreate,
    NotificationResponse,
    PushSubscribeRequest,
    PushUnsubscribeRequest,
    PushSubscriptionResponse,
    PushTestRequest,
    PushSendResult,
)

__all__ = [
    "Tenant",
    "UnitCreate",
    "UnitUpdate",
    "UnitResponse",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "ExpenseStats",
    "IncomeCreate",
    "IncomeUpdate",
    "IncomeResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskReminderResponse",
    "ReminderRunResponse",
    "ReminderStatusResponse",
    "CronStatusResponse",
    "DocumentUpdate",
    "DocumentResponse",
    "DocumentTagsResponse",
    "NotificationCreate",
    "NotificationResponse",
    "PushSubscribeRequest",
    "PushUnsubscribeRequest",
    "PushSubscriptionResponse",
    "PushTestRequest",
    "PushSendResult",
]
