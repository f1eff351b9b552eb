"""
Task, reminder, and reminder-run schemas.
"""
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, PositiveInt, model_validator

from rentdesk.schemas.common import Scope, check_scope

TaskCategory = Literal[
    "Maintenance",
    "Inspection",
    "Repair",
    "Administrative",
    "Legal",
    "Financial",
    "Other",
]
TaskPriority = Literal["Low", "Medium", "High", "Urgent"]
TaskStatusValue = Literal["Pending", "Completed"]


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    category: TaskCategory
    priority: TaskPriority
    scope: Scope
    unit_id: Optional[str] = None
    due_date: date
    notes: str = ""
    reminder_days: List[PositiveInt] = []

    @model_validator(mode="after")
    def _scope_matches_unit(self):
        self.unit_id = check_scope(self.scope, self.unit_id)
        return self


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[TaskCategory] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatusValue] = None
    scope: Optional[Scope] = None
    unit_id: Optional[str] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None
    reminder_days: Optional[List[PositiveInt]] = None  # replaces existing reminders


class TaskReminderResponse(BaseModel):
    id: str
    period: str
    days_before: int
    scheduled_for: datetime
    notification_sent: bool

    class Config:
        from_attributes = True


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    category: str
    priority: str
    status: str
    scope: str
    unit_id: Optional[str] = None
    due_date: date
    completed_date: Optional[datetime] = None
    notes: str
    due_notification_sent: bool
    reminders: List[TaskReminderResponse]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReminderRunResponse(BaseModel):
    """Result of one reminder-processing pass."""

    success: bool = True
    message: str = "Reminders processed successfully"
    timestamp: datetime
    duration_ms: int
    total_tasks: int
    active_tasks: int
    reminders_sent: int
    due_notifications_sent: int
    processed_reminders: List[str]
    processed_due_notifications: List[str]


class ReminderStatusResponse(BaseModel):
    upcoming_reminders: int
    overdue_tasks: int
    timestamp: datetime


class UpcomingTaskSummary(BaseModel):
    id: str
    title: str
    due_date: date
    pending_reminders: int


class OverdueTaskSummary(BaseModel):
    id: str
    title: str
    due_date: date
    days_overdue: int


class CronStats(BaseModel):
    upcoming_reminders: int
    overdue_tasks: int
    next_reminders: List[UpcomingTaskSummary]
    overdue_task_titles: List[OverdueTaskSummary]


class CronInfo(BaseModel):
    schedule: str
    endpoint: str


class CronStatusResponse(BaseModel):
    status: str
    timestamp: datetime
    stats: CronStats
    cron_info: CronInfo
