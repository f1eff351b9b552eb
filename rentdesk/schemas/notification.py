"""
Notification and push subscription schemas.
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

NotificationTypeValue = Literal[
    "task_reminder",
    "task_overdue",
    "task_completed",
    "system",
]


class NotificationCreate(BaseModel):
    type: NotificationTypeValue
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    task_id: Optional[str] = None
    unit_id: Optional[str] = None
    is_read: bool = False


class NotificationResponse(BaseModel):
    id: str
    type: str
    title: str
    message: str
    task_id: Optional[str] = None
    unit_id: Optional[str] = None
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class PushKeys(BaseModel):
    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)


class PushSubscriptionData(BaseModel):
    """Browser PushSubscription.toJSON() shape."""

    endpoint: str = Field(..., min_length=1)
    keys: PushKeys


class PushSubscribeRequest(BaseModel):
    subscription: PushSubscriptionData


class PushUnsubscribeRequest(BaseModel):
    endpoint: str = Field(..., min_length=1)


class PushSubscriptionResponse(BaseModel):
    id: str
    endpoint: str
    created_at: datetime

    class Config:
        from_attributes = True


class PushTestRequest(BaseModel):
    title: str = "Test Notification"
    body: str = "This is a test notification from your rental management app"
    url: str = "/tasks"


class PushSendResult(BaseModel):
    sent: int
    failed: int
    removed: int
