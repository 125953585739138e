"""Follow-up tasks attached to clients."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TaskStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskBase(SQLModel):
    client_id: str
    title: str = Field(min_length=1, max_length=200)
    due_date: datetime
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    assigned_to: str = Field(default="admin", max_length=64)


class Task(TaskBase):
    id: str


class TaskUpdate(SQLModel):
    client_id: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    due_date: Optional[datetime] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    assigned_to: Optional[str] = None
