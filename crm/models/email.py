"""Email template and email log models."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class EmailTemplate(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Reusable email body with named variables."""

    __tablename__ = "email_templates"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    body_html: Mapped[str] = mapped_column(Text, nullable=False)
    body_text: Mapped[str | None] = mapped_column(Text)
    variables: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)

    creator: Mapped["User"] = relationship("User")


class EmailLog(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Outgoing email record. Status: pending, sent, failed, bounced."""

    __tablename__ = "email_logs"

    template_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("email_templates.id", ondelete="SET NULL")
    )
    from_email: Mapped[str] = mapped_column(String(255), nullable=False)
    to_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    cc: Mapped[list | None] = mapped_column(JSON)
    bcc: Mapped[list | None] = mapped_column(JSON)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    body_html: Mapped[str | None] = mapped_column(Text)
    body_text: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False, index=True)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    error_message: Mapped[str | None] = mapped_column(Text)
    sent_by: Mapped[str | None] = mapped_column(String(36), ForeignKey("users.id"), index=True)
    related_to_type: Mapped[str | None] = mapped_column(String(50))
    related_to_id: Mapped[str | None] = mapped_column(String(36))

    template: Mapped[EmailTemplate | None] = relationship(EmailTemplate)
    sender: Mapped["User"] = relationship("User")
