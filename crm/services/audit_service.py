"""Audit log service."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm.models.audit_log import AuditLog


class AuditService:
    """Service for writing and reading audit log entries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(self, **values: Any) -> AuditLog:
        """Write one audit entry and commit it."""
        entry = AuditLog(**values)
        self.db.add(entry)
        await self.db.commit()
        return entry

    async def get_log(self, log_id: str) -> AuditLog | None:
        result = await self.db.execute(
            select(AuditLog).options(selectinload(AuditLog.user)).where(AuditLog.id == log_id)
        )
        return result.scalar_one_or_none()

    async def list_logs(
        self,
        user_id: str | None = None,
        action: str | None = None,
        resource_type: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[AuditLog], int]:
        """Audit entries newest first with optional filters."""

        query = select(AuditLog)
        if user_id:
            query = query.where(AuditLog.user_id == user_id)
        if action:
            query = query.where(AuditLog.action == action)
        if resource_type:
            query = query.where(AuditLog.resource_type == resource_type)

        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))

        query = (
            query.options(selectinload(AuditLog.user))
            .order_by(AuditLog.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total
