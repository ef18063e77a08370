"""Email template and log schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from .common import TimestampMixin


class EmailTemplateCreate(BaseModel):
    """Schema for creating an email template."""

    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=500)
    body_html: str = Field(..., min_length=1)
    body_text: str | None = None
    variables: list[str] = Field(default_factory=list, description="Placeholder names")
    category: str | None = Field(None, max_length=100)
    is_active: bool = True


class EmailTemplateResponse(TimestampMixin):
    id: str
    name: str
    subject: str
    body_html: str
    body_text: str | None
    variables: list[str]
    category: str | None
    is_active: bool
    created_by: str

    class Config:
        from_attributes = True


class EmailSendRequest(BaseModel):
    """Schema for queueing an outgoing email."""

    from_email: EmailStr
    to_email: EmailStr
    cc: list[EmailStr] | None = None
    bcc: list[EmailStr] | None = None
    subject: str = Field(..., min_length=1, max_length=500)
    body_html: str | None = None
    body_text: str | None = None
    template_id: str | None = None
    related_to_type: str | None = Field(None, max_length=50)
    related_to_id: str | None = None


class EmailLogResponse(TimestampMixin):
    """Schema for email log response."""

    id: str
    template_id: str | None
    from_email: str
    to_email: str
    cc: list[str] | None
    bcc: list[str] | None
    subject: str
    body_html: str | None
    body_text: str | None
    status: str
    sent_at: datetime | None
    error_message: str | None
    sent_by: str | None
    related_to_type: str | None
    related_to_id: str | None

    class Config:
        from_attributes = True
