"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field, validator

from crm.utils.validators import validate_email, validate_password, validate_phone_number

from .user import UserResponse


class RegisterRequest(BaseModel):
    """Schema for self-registration."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")
    phone: str | None = Field(None, description="Phone number")

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


class LoginRequest(BaseModel):
    """Schema for user login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class RefreshTokenRequest(BaseModel):
    """Schema for exchanging a refresh token."""

    model_config = {"populate_by_name": True}

    refresh_token: str = Field(..., alias="refreshToken", description="Refresh token")


class AuthTokens(BaseModel):
    """Schema for the user plus token pair returned by login and register."""

    model_config = {"populate_by_name": True}

    user: UserResponse
    token: str
    refresh_token: str = Field(..., alias="refreshToken")


class TokenPair(BaseModel):
    model_config = {"populate_by_name": True}

    token: str
    refresh_token: str = Field(..., alias="refreshToken")


class CurrentUser(BaseModel):
    """Schema for the authenticated user and their effective permissions."""

    user: UserResponse
    permissions: list[str]
