"""Role and permission schemas."""

from pydantic import BaseModel, Field

from .common import TimestampMixin


class PermissionResponse(BaseModel):
    """Schema for a permission in the catalogue."""

    id: str
    name: str
    resource: str
    action: str
    description: str | None

    class Config:
        from_attributes = True


class RoleSummary(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class RoleResponse(TimestampMixin):
    """Schema for role response."""

    id: str
    name: str
    description: str | None
    is_system: bool
    is_active: bool
    permissions: list[PermissionResponse] = []

    class Config:
        from_attributes = True


class RoleCreate(BaseModel):
    """Schema for creating a role."""

    name: str = Field(..., min_length=1, max_length=100, description="Unique role name")
    description: str | None = Field(None, description="Role description")
    permission_ids: list[str] = Field(default_factory=list, description="Permissions to grant")


class RolePermissionsUpdate(BaseModel):
    """Schema for replacing the permissions of a role."""

    permission_ids: list[str] = Field(..., description="Complete new permission set")
