"""User management routes."""

from fastapi import APIRouter, Depends, status

from crm.constants.permissions import ADMIN_ROLE
from crm.dependencies.auth import require_permission, require_role
from crm.dependencies.services import get_user_service
from crm.policies import Actor
from crm.schemas.common import SuccessResponse
from crm.schemas.user import UserCreate, UserResponse, UserRolesUpdate
from crm.services.user_service import UserService

router = APIRouter()


@router.get("/", response_model=SuccessResponse[list[UserResponse]])
async def list_users(
    actor: Actor = Depends(require_permission("users:read")),
    user_service: UserService = Depends(get_user_service),
):
    users = await user_service.list_users()
    return SuccessResponse(data=[UserResponse.model_validate(u) for u in users])


@router.post("/", response_model=SuccessResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(
    user_create: UserCreate,
    actor: Actor = Depends(require_role(ADMIN_ROLE)),
    user_service: UserService = Depends(get_user_service),
):
    """Create a user with an initial role set."""

    user = await user_service.create_user(user_create)

    return SuccessResponse(
        message="User created successfully",
        data=UserResponse.model_validate(user),
    )


@router.put("/{user_id}/roles", response_model=SuccessResponse[UserResponse])
async def assign_roles(
    user_id: str,
    roles_update: UserRolesUpdate,
    actor: Actor = Depends(require_role(ADMIN_ROLE)),
    user_service: UserService = Depends(get_user_service),
):
    """Replace the user's roles. Takes effect on their next request."""

    user = await user_service.set_roles(user_id, roles_update.role_ids)

    return SuccessResponse(
        message="Roles assigned successfully",
        data=UserResponse.model_validate(user),
    )
