"""Deal model."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class DealStage(str, Enum):
    """Sales pipeline stages."""

    LEAD = "lead"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed-won"
    CLOSED_LOST = "closed-lost"


CLOSED_STAGES = {DealStage.CLOSED_WON.value, DealStage.CLOSED_LOST.value}


class Deal(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Sales opportunity owned by a single user."""

    __tablename__ = "deals"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    value: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    stage: Mapped[str] = mapped_column(
        String(30), default=DealStage.LEAD.value, nullable=False, index=True
    )
    probability: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    expected_close_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), index=True
    )
    actual_close_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    priority: Mapped[str] = mapped_column(String(20), default="medium", nullable=False)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    custom_fields: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    lost_reason: Mapped[str | None] = mapped_column(Text)

    contact_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("contacts.id", ondelete="SET NULL"), index=True
    )
    owner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )

    contact: Mapped[Optional["Contact"]] = relationship("Contact", back_populates="deals")
    owner: Mapped["User"] = relationship("User", foreign_keys=[owner_id])

    @property
    def is_closed(self) -> bool:
        return self.stage in CLOSED_STAGES

    def __repr__(self) -> str:
        return f"<Deal(id={self.id}, title='{self.title}', stage='{self.stage}')>"
