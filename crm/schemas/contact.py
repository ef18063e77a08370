"""Contact schemas."""

from typing import Any

from pydantic import BaseModel, EmailStr, Field, validator

from crm.utils.validators import validate_phone_number, validate_url

from .common import PaginationMeta, TimestampMixin, UserSummary


class ContactBase(BaseModel):
    """Fields shared by contact create and update."""

    email: EmailStr | None = Field(None, description="Contact email")
    phone: str | None = Field(None, description="Phone number")
    company: str | None = Field(None, max_length=255)
    position: str | None = Field(None, max_length=255)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    website: str | None = Field(None, max_length=255)
    linkedin: str | None = Field(None, max_length=255)
    notes: str | None = None
    lead_source: str | None = Field(None, max_length=100)

    @validator("phone")
    def validate_phone_format(cls, v):
        if v:
            validate_phone_number(v)
        return v

    @validator("website")
    def validate_website(cls, v):
        if v:
            validate_url(v)
        return v


class ContactCreate(ContactBase):
    """Schema for creating a contact."""

    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")
    status: str = Field("active", max_length=50)
    tags: list[str] = Field(default_factory=list)
    custom_fields: dict[str, Any] = Field(default_factory=dict)


class ContactUpdate(ContactBase):
    """Schema for updating a contact. Ownership cannot be changed here."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    status: str | None = Field(None, max_length=50)
    tags: list[str] | None = None
    custom_fields: dict[str, Any] | None = None


class ContactResponse(TimestampMixin):
    """Schema for contact response."""

    id: str
    first_name: str
    last_name: str
    email: str | None
    phone: str | None
    company: str | None
    position: str | None
    address: str | None
    city: str | None
    state: str | None
    country: str | None
    postal_code: str | None
    website: str | None
    linkedin: str | None
    tags: list[str]
    notes: str | None
    custom_fields: dict[str, Any]
    lead_source: str | None
    status: str
    owner_id: str
    owner: UserSummary | None = None

    class Config:
        from_attributes = True


class ContactList(BaseModel):
    contacts: list[ContactResponse]
    pagination: PaginationMeta
