"""Audit log schemas."""

from typing import Any

from pydantic import BaseModel

from .common import PaginationMeta, TimestampMixin, UserSummary


class AuditLogResponse(TimestampMixin):
    """Schema for audit log response."""

    id: str
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    old_values: dict[str, Any] | None
    new_values: Any | None
    ip_address: str | None
    user_agent: str | None
    endpoint: str | None
    method: str | None
    status_code: int | None
    user: UserSummary | None = None

    class Config:
        from_attributes = True


class AuditLogList(BaseModel):
    logs: list[AuditLogResponse]
    pagination: PaginationMeta
