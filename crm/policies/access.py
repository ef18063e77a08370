"""Access decision checks.

Every check is a pure function of its inputs and returns an ``AccessResult``.
The evaluation order is fixed:

1. no actor                     -> unauthenticated
2. actor holds the Admin role   -> allow (not for ``check_permission``)
3. resource or owner missing    -> not found
4. the check's own rule         -> allow or forbidden

Denials for authenticated actors produce one warning log line.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

from .base_policy import PERMISSION_DENIED, RESOURCE_DENIED, ROLE_DENIED, AccessResult, Actor

logger = logging.getLogger(__name__)

_MISSING = object()


def _log_denial(actor: Actor, result: AccessResult, check: str, **context: Any) -> None:
    try:
        logger.warning(
            f"Access denied for user {actor.id} ({actor.email}) by {check}",
            extra={
                "event": "access_denied",
                "check": check,
                "user_id": actor.id,
                "email": actor.email,
                "required_permissions": list(result.required_permissions),
                "required_roles": list(result.required_roles),
                **context,
            },
        )
    except Exception:
        # Logging failures never fail the request
        pass


def _owner_value(resource: Any, owner_field: str) -> Any:
    if isinstance(resource, Mapping):
        return resource.get(owner_field, _MISSING)
    return getattr(resource, owner_field, _MISSING)


def owner_ids(resource: Any, owner_fields: Sequence[str]) -> Optional[list[str]]:
    """Return the non-null owner ids of ``resource``, or None when it has none."""
    owners = []
    for owner_field in owner_fields:
        value = _owner_value(resource, owner_field)
        if value is not _MISSING and value is not None:
            owners.append(str(value))
    return owners or None


def _as_fields(owner_field: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(owner_field, str):
        return (owner_field,)
    return tuple(owner_field)


def check_permission(actor: Optional[Actor], required_permissions: Iterable[str]) -> AccessResult:
    """Allow when the actor holds at least one of ``required_permissions``.

    The Admin role gets no bypass here; it passes because it carries every
    permission.
    """
    if actor is None:
        return AccessResult.unauthenticated()

    required = tuple(required_permissions)
    if actor.has_any_permission(required):
        return AccessResult.allow()

    result = AccessResult.forbidden(PERMISSION_DENIED, required_permissions=required)
    _log_denial(actor, result, "check_permission")
    return result


def check_role(actor: Optional[Actor], required_roles: Iterable[str]) -> AccessResult:
    """Allow Admins and actors holding at least one of ``required_roles``."""
    if actor is None:
        return AccessResult.unauthenticated()

    required = tuple(required_roles)
    if actor.is_admin or actor.has_any_role(required):
        return AccessResult.allow()

    result = AccessResult.forbidden(ROLE_DENIED, required_roles=required)
    _log_denial(actor, result, "check_role")
    return result


def check_ownership(
    actor: Optional[Actor],
    resource: Any,
    owner_field: str | Sequence[str] = "owner_id",
) -> AccessResult:
    """Allow Admins and the owner of ``resource``.

    ``owner_field`` may name several fields (e.g. ``assigned_to`` and
    ``created_by`` on tasks); matching any of them counts as ownership.
    A missing resource, or one without any owner value, is reported as not
    found before ownership is considered.
    """
    if actor is None:
        return AccessResult.unauthenticated()
    if actor.is_admin:
        return AccessResult.allow()
    if resource is None:
        return AccessResult.not_found()

    fields = _as_fields(owner_field)
    owners = owner_ids(resource, fields)
    if owners is None:
        return AccessResult.not_found()
    if actor.id in owners:
        return AccessResult.allow()

    result = AccessResult.forbidden(RESOURCE_DENIED)
    _log_denial(actor, result, "check_ownership", owner_field=list(fields))
    return result


def check_team_access(
    actor: Optional[Actor],
    resource: Any,
    actor_team_ids: Iterable[str] = (),
    owner_team_ids: Iterable[str] = (),
    owner_field: str = "owner_id",
) -> AccessResult:
    """Allow Admins, the owner, and anyone sharing a team with the owner.

    Team membership sets are loaded by the caller; see
    ``crm.policies.guards.ensure_team_access``.
    """
    if actor is None:
        return AccessResult.unauthenticated()
    if actor.is_admin:
        return AccessResult.allow()
    if resource is None:
        return AccessResult.not_found()

    owners = owner_ids(resource, (owner_field,))
    if owners is None:
        return AccessResult.not_found()
    if actor.id in owners:
        return AccessResult.allow()

    shared = {str(t) for t in actor_team_ids} & {str(t) for t in owner_team_ids}
    if shared:
        return AccessResult.allow()

    result = AccessResult.forbidden(RESOURCE_DENIED)
    _log_denial(actor, result, "check_team_access", owner_id=owners[0])
    return result


def check_manager_access(
    actor: Optional[Actor],
    resource: Any,
    owner_manager_id: Optional[str] = None,
    owner_field: str = "owner_id",
) -> AccessResult:
    """Allow Admins, the owner, and the owner's direct manager."""
    if actor is None:
        return AccessResult.unauthenticated()
    if actor.is_admin:
        return AccessResult.allow()
    if resource is None:
        return AccessResult.not_found()

    owners = owner_ids(resource, (owner_field,))
    if owners is None:
        return AccessResult.not_found()
    if actor.id in owners:
        return AccessResult.allow()
    if owner_manager_id is not None and str(owner_manager_id) == actor.id:
        return AccessResult.allow()

    result = AccessResult.forbidden(RESOURCE_DENIED)
    _log_denial(actor, result, "check_manager_access", owner_id=owners[0])
    return result
