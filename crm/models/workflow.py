"""Workflow automation model."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Workflow(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Automation rule: a trigger on a resource plus conditions and actions."""

    __tablename__ = "workflows"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    # record_created, record_updated, record_deleted, time_based, manual
    trigger_type: Mapped[str] = mapped_column(String(50), nullable=False)
    trigger_resource: Mapped[str] = mapped_column(String(50), nullable=False)
    conditions: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    actions: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    created_by: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    execution_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_executed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    creator: Mapped["User"] = relationship("User")

    __table_args__ = (Index("ix_workflows_trigger", "trigger_type", "trigger_resource"),)

    def __repr__(self) -> str:
        return f"<Workflow(id={self.id}, name='{self.name}', active={self.is_active})>"
