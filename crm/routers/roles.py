"""Role and permission management routes. Admin only."""

from fastapi import APIRouter, Depends, status

from crm.constants.permissions import ADMIN_ROLE
from crm.dependencies.auth import require_role
from crm.dependencies.services import get_role_service
from crm.schemas.common import SuccessResponse
from crm.schemas.role import PermissionResponse, RoleCreate, RolePermissionsUpdate, RoleResponse
from crm.services.role_service import RoleService

router = APIRouter(dependencies=[Depends(require_role(ADMIN_ROLE))])


@router.get("/", response_model=SuccessResponse[list[RoleResponse]])
async def list_roles(role_service: RoleService = Depends(get_role_service)):
    roles = await role_service.list_roles()
    return SuccessResponse(data=[RoleResponse.model_validate(r) for r in roles])


@router.get("/permissions", response_model=SuccessResponse[list[PermissionResponse]])
async def list_permissions(role_service: RoleService = Depends(get_role_service)):
    """The full permission catalogue."""

    permissions = await role_service.list_permissions()
    return SuccessResponse(data=[PermissionResponse.model_validate(p) for p in permissions])


@router.post("/", response_model=SuccessResponse[RoleResponse], status_code=status.HTTP_201_CREATED)
async def create_role(
    role_create: RoleCreate,
    role_service: RoleService = Depends(get_role_service),
):
    role = await role_service.create_role(role_create)

    return SuccessResponse(
        message="Role created successfully",
        data=RoleResponse.model_validate(role),
    )


@router.put("/{role_id}/permissions", response_model=SuccessResponse[RoleResponse])
async def assign_permissions(
    role_id: str,
    permissions_update: RolePermissionsUpdate,
    role_service: RoleService = Depends(get_role_service),
):
    """Replace the permission set of a role."""

    role = await role_service.set_permissions(role_id, permissions_update.permission_ids)

    return SuccessResponse(
        message="Permissions assigned successfully",
        data=RoleResponse.model_validate(role),
    )
