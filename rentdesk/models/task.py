"""
Task and TaskReminder models.

A task carries any number of reminders; each reminder fires once, at its
scheduled_for time, unless the task is completed first.
"""
from datetime import date, datetime
from typing import List, Optional
from sqlalchemy import String, DateTime, Date, Text, Integer, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdesk.database import Base, generate_id, utcnow


class TaskStatus:
    PENDING = "Pending"
    COMPLETED = "Completed"


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: generate_id("task"),
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    category: Mapped[str] = mapped_column(String(50), nullable=False)  # 'Maintenance', 'Inspection', ...
    priority: Mapped[str] = mapped_column(String(20), nullable=False)  # 'Low', 'Medium', 'High', 'Urgent'
    status: Mapped[str] = mapped_column(String(20), default=TaskStatus.PENDING, index=True)
    scope: Mapped[str] = mapped_column(String(10), nullable=False)
    unit_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        ForeignKey("units.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    completed_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    notes: Mapped[str] = mapped_column(Text, default="")
    due_notification_sent: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )

    # Relationships
    reminders: Mapped[List["TaskReminder"]] = relationship(
        "TaskReminder",
        back_populates="task",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="TaskReminder.scheduled_for",
    )

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class TaskReminder(Base):
    __tablename__ = "task_reminders"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: generate_id("reminder"),
    )
    task_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    period: Mapped[str] = mapped_column(String(20), nullable=False)  # '1_day', '2_days', '1_week', 'custom'
    days_before: Mapped[int] = mapped_column(Integer, nullable=False)
    scheduled_for: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    notification_sent: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    task: Mapped["Task"] = relationship("Task", back_populates="reminders")
