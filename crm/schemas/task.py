"""Task schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from crm.models.task import TaskPriority, TaskStatus

from .common import PaginationMeta, TimestampMixin, UserSummary

RELATED_TYPE_PATTERN = "^(contact|deal)$"


class TaskCreate(BaseModel):
    """Schema for creating a task."""

    title: str = Field(..., min_length=1, max_length=255, description="Task title")
    description: str | None = None
    due_date: datetime | None = None
    priority: TaskPriority = TaskPriority.MEDIUM.value
    status: TaskStatus = TaskStatus.PENDING.value
    assigned_to: str | None = Field(None, description="Assignee, defaults to the creator")
    related_to_type: str | None = Field(None, pattern=RELATED_TYPE_PATTERN)
    related_to_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    custom_fields: dict[str, Any] = Field(default_factory=dict)

    class Config:
        use_enum_values = True


class TaskUpdate(BaseModel):
    """Schema for updating a task. The creator cannot be changed here."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    due_date: datetime | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    assigned_to: str | None = None
    related_to_type: str | None = Field(None, pattern=RELATED_TYPE_PATTERN)
    related_to_id: str | None = None
    tags: list[str] | None = None
    custom_fields: dict[str, Any] | None = None

    class Config:
        use_enum_values = True


class TaskResponse(TimestampMixin):
    """Schema for task response."""

    id: str
    title: str
    description: str | None
    due_date: datetime | None
    priority: str
    status: str
    completed_at: datetime | None
    assigned_to: str
    created_by: str
    related_to_type: str | None
    related_to_id: str | None
    tags: list[str]
    custom_fields: dict[str, Any]
    assignee: UserSummary | None = None
    creator: UserSummary | None = None

    class Config:
        from_attributes = True


class TaskList(BaseModel):
    tasks: list[TaskResponse]
    pagination: PaginationMeta
