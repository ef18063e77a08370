"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, validator

from crm.utils.validators import validate_email, validate_password, validate_phone_number

from .common import TimestampMixin
from .role import RoleSummary


class UserCreate(BaseModel):
    """Schema for an administrator creating a user."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")
    phone: str | None = Field(None, description="Phone number")
    avatar: str | None = Field(None, max_length=500, description="Profile avatar URL")
    manager_id: str | None = Field(None, description="Direct manager")
    is_active: bool = True
    role_ids: list[str] = Field(default_factory=list, description="Roles to assign")

    @validator("email")
    def validate_email_format(cls, v):
        return validate_email(v)

    @validator("password")
    def validate_password_strength(cls, v):
        validate_password(v)
        return v

    @validator("phone")
    def validate_phone_format(cls, v):
        if v:
            validate_phone_number(v)
        return v


class UserRolesUpdate(BaseModel):
    """Schema for replacing the roles of a user."""

    role_ids: list[str] = Field(..., description="Complete new role set")


class UserResponse(TimestampMixin):
    """Schema for user response."""

    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone: str | None
    avatar: str | None
    is_active: bool
    last_login: datetime | None
    manager_id: str | None
    roles: list[RoleSummary] = []

    class Config:
        from_attributes = True
