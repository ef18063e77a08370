"""Workflow schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .common import TimestampMixin, UserSummary

TRIGGER_TYPE_PATTERN = "^(record_created|record_updated|record_deleted|time_based|manual)$"


class WorkflowCreate(BaseModel):
    """Schema for creating a workflow."""

    name: str = Field(..., min_length=1, max_length=255, description="Workflow name")
    description: str | None = None
    trigger_type: str = Field(..., pattern=TRIGGER_TYPE_PATTERN)
    trigger_resource: str = Field(..., min_length=1, max_length=50)
    conditions: list[dict[str, Any]] = Field(default_factory=list)
    actions: list[dict[str, Any]] = Field(default_factory=list)
    is_active: bool = False


class WorkflowResponse(TimestampMixin):
    """Schema for workflow response."""

    id: str
    name: str
    description: str | None
    trigger_type: str
    trigger_resource: str
    conditions: list[dict[str, Any]]
    actions: list[dict[str, Any]]
    is_active: bool
    created_by: str
    execution_count: int
    last_executed_at: datetime | None
    creator: UserSummary | None = None

    class Config:
        from_attributes = True
