"""Deal schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, validator

from crm.models.deal import DealStage
from crm.utils.validators import validate_currency

from .common import PaginationMeta, TimestampMixin, UserSummary

PRIORITY_PATTERN = "^(low|medium|high)$"


class ContactSummary(BaseModel):
    id: str
    first_name: str
    last_name: str
    company: str | None = None

    class Config:
        from_attributes = True


class DealCreate(BaseModel):
    """Schema for creating a deal."""

    title: str = Field(..., min_length=1, max_length=255, description="Deal title")
    description: str | None = None
    value: float = Field(0, ge=0, description="Deal value, must not be negative")
    currency: str = Field("USD", description="3-letter currency code")
    stage: DealStage = DealStage.LEAD.value
    probability: int = Field(0, ge=0, le=100)
    expected_close_date: datetime | None = None
    contact_id: str | None = None
    priority: str = Field("medium", pattern=PRIORITY_PATTERN)
    tags: list[str] = Field(default_factory=list)
    custom_fields: dict[str, Any] = Field(default_factory=dict)

    @validator("currency")
    def validate_currency_code(cls, v):
        return validate_currency(v)

    class Config:
        use_enum_values = True


class DealUpdate(BaseModel):
    """Schema for updating a deal. Ownership cannot be changed here."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    value: float | None = Field(None, ge=0)
    currency: str | None = None
    stage: DealStage | None = None
    probability: int | None = Field(None, ge=0, le=100)
    expected_close_date: datetime | None = None
    actual_close_date: datetime | None = None
    contact_id: str | None = None
    priority: str | None = Field(None, pattern=PRIORITY_PATTERN)
    tags: list[str] | None = None
    custom_fields: dict[str, Any] | None = None
    lost_reason: str | None = None

    @validator("currency")
    def validate_currency_code(cls, v):
        if v is not None:
            return validate_currency(v)
        return v

    class Config:
        use_enum_values = True


class DealResponse(TimestampMixin):
    """Schema for deal response."""

    id: str
    title: str
    description: str | None
    value: float
    currency: str
    stage: str
    probability: int
    expected_close_date: datetime | None
    actual_close_date: datetime | None
    priority: str
    tags: list[str]
    custom_fields: dict[str, Any]
    lost_reason: str | None
    contact_id: str | None
    owner_id: str
    contact: ContactSummary | None = None
    owner: UserSummary | None = None

    class Config:
        from_attributes = True


class DealList(BaseModel):
    deals: list[DealResponse]
    pagination: PaginationMeta
