"""Authentication and access dependencies for FastAPI."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.user import User
from crm.policies import Actor, check_permission, check_role, require
from crm.services.auth_service import AuthService
from crm.utils.exceptions import AuthenticationError

from .database import get_db

# Security scheme for Bearer tokens
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Get the user behind the bearer token, or None when no token was sent.

    A token that is present but expired, malformed, or pointing at a missing
    or deactivated user is rejected with 401.
    """
    if not credentials:
        return None

    user = await AuthService(db).authenticate_token(credentials.credentials)

    # Picked up by the audit middleware
    request.state.actor_id = user.id
    return user


async def get_optional_actor(
    current_user: User | None = Depends(get_current_user),
) -> Actor | None:
    """Actor for the current request, recomputed from its current roles."""
    if current_user is None:
        return None
    return Actor.from_user(current_user)


async def get_current_actor(actor: Actor | None = Depends(get_optional_actor)) -> Actor:
    """Get current actor, raise exception if not authenticated."""
    if actor is None:
        raise AuthenticationError("No token provided. Authorization header required.")
    return actor


def require_permission(*permissions: str):
    """
    Dependency factory: the actor must hold at least one of ``permissions``.

    Usage:
        @router.get("/")
        async def list_contacts(actor: Actor = Depends(require_permission("contacts:read"))):
            pass
    """

    async def dependency(actor: Actor | None = Depends(get_optional_actor)) -> Actor:
        require(check_permission(actor, permissions))
        return actor

    return dependency


def require_role(*roles: str):
    """
    Dependency factory: the actor must hold one of ``roles`` or be Admin.

    Usage:
        @router.post("/", dependencies=[Depends(require_role("Admin"))])
    """

    async def dependency(actor: Actor | None = Depends(get_optional_actor)) -> Actor:
        require(check_role(actor, roles))
        return actor

    return dependency
