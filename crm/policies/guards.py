"""Guard helpers that turn access decisions into exceptions."""

from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.team import TeamMember
from crm.models.user import User
from crm.utils.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    PermissionDeniedError,
    RoleRequiredError,
)

from .access import check_manager_access, check_ownership, check_team_access, owner_ids
from .base_policy import RESOURCE_NOT_FOUND, AccessDecision, AccessResult, Actor


def require(result: AccessResult) -> None:
    """
    Raise the exception matching a denied result; do nothing when allowed.

    Usage:
        require(check_ownership(actor, contact))
    """
    if result.allowed:
        return

    if result.decision is AccessDecision.UNAUTHENTICATED:
        raise AuthenticationError(result.message)

    if result.decision is AccessDecision.NOT_FOUND:
        raise NotFoundError(result.message)

    if result.required_permissions:
        raise PermissionDeniedError(
            result.message, required_permissions=result.required_permissions
        )

    if result.required_roles:
        raise RoleRequiredError(result.message, required_roles=result.required_roles)

    raise AuthorizationError(result.message)


def _require_found(resource: Any) -> None:
    # Admins are allowed before existence is considered
    if resource is None:
        raise NotFoundError(RESOURCE_NOT_FOUND)


def require_ownership(
    actor: Optional[Actor],
    resource: Any,
    owner_field: str | Sequence[str] = "owner_id",
) -> None:
    """
    Require that actor owns the resource (Admins always pass).

    Usage:
        require_ownership(actor, task, ("assigned_to", "created_by"))
    """
    require(check_ownership(actor, resource, owner_field))
    _require_found(resource)


async def load_team_ids(db: AsyncSession, user_id: str) -> set[str]:
    """Ids of every team the user belongs to."""
    result = await db.execute(select(TeamMember.team_id).where(TeamMember.user_id == user_id))
    return set(result.scalars().all())


async def load_manager_id(db: AsyncSession, user_id: str) -> Optional[str]:
    result = await db.execute(select(User.manager_id).where(User.id == user_id))
    return result.scalar_one_or_none()


def _needs_lookup(actor: Optional[Actor], resource: Any, owner_field: str) -> Optional[str]:
    """Owner id to look up, or None when the decision does not depend on it."""
    if actor is None or actor.is_admin or resource is None:
        return None
    owners = owner_ids(resource, (owner_field,))
    if owners is None or actor.id in owners:
        return None
    return owners[0]


async def ensure_team_access(
    db: AsyncSession,
    actor: Optional[Actor],
    resource: Any,
    owner_field: str = "owner_id",
) -> None:
    """
    Require that actor is the owner or shares a team with the owner.

    Usage:
        await ensure_team_access(db, actor, contact)
    """
    actor_teams: set[str] = set()
    owner_teams: set[str] = set()

    owner_id = _needs_lookup(actor, resource, owner_field)
    if owner_id is not None:
        actor_teams = await load_team_ids(db, actor.id)
        owner_teams = await load_team_ids(db, owner_id)

    require(check_team_access(actor, resource, actor_teams, owner_teams, owner_field))
    _require_found(resource)


async def ensure_manager_access(
    db: AsyncSession,
    actor: Optional[Actor],
    resource: Any,
    owner_field: str = "owner_id",
) -> None:
    """
    Require that actor is the owner or the owner's direct manager.

    Usage:
        await ensure_manager_access(db, actor, deal)
    """
    manager_id = None

    owner_id = _needs_lookup(actor, resource, owner_field)
    if owner_id is not None:
        manager_id = await load_manager_id(db, owner_id)

    require(check_manager_access(actor, resource, manager_id, owner_field))
    _require_found(resource)
