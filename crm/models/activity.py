"""Activity feed model."""

from sqlalchemy import JSON, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Activity(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Something a user did: a call, a note, a deal moving stage, ..."""

    __tablename__ = "activities"

    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    related_to_type: Mapped[str | None] = mapped_column(String(50))
    related_to_id: Mapped[str | None] = mapped_column(String(36))
    # "metadata" is reserved on declarative classes
    meta: Mapped[dict] = mapped_column("metadata", JSON, default=dict, nullable=False)

    user: Mapped["User"] = relationship("User")

    __table_args__ = (Index("ix_activities_related_to", "related_to_type", "related_to_id"),)

    def __repr__(self) -> str:
        return f"<Activity(id={self.id}, type='{self.type}')>"
