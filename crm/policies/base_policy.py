"""Base policy types: the acting identity and the outcome of an access check."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from crm.constants import ADMIN_ROLE, AccessStatus

AUTHENTICATION_REQUIRED = "Authentication required."
PERMISSION_DENIED = "You do not have permission to perform this action."
ROLE_DENIED = "You do not have the required role to perform this action."
RESOURCE_DENIED = "You do not have permission to access this resource."
RESOURCE_NOT_FOUND = "Resource not found."


class AccessDecision(str, Enum):
    """Possible outcomes of an access check."""

    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


_STATUS_BY_DECISION = {
    AccessDecision.ALLOW: AccessStatus.ALLOWED,
    AccessDecision.UNAUTHENTICATED: AccessStatus.UNAUTHENTICATED,
    AccessDecision.FORBIDDEN: AccessStatus.FORBIDDEN,
    AccessDecision.NOT_FOUND: AccessStatus.NOT_FOUND,
}


@dataclass(frozen=True)
class Actor:
    """Authenticated identity with its effective roles and permissions.

    Built fresh for every request from the user's current role assignment,
    so a role change takes effect on the next request.
    """

    id: str
    email: str = ""
    roles: frozenset[str] = field(default_factory=frozenset)
    permissions: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_user(cls, user: Any) -> "Actor":
        """Build an actor from a user loaded with roles and permissions."""
        return cls(
            id=str(user.id),
            email=user.email,
            roles=frozenset(user.role_names),
            permissions=frozenset(user.permission_names),
        )

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles

    def has_any_permission(self, permissions) -> bool:
        return not self.permissions.isdisjoint(permissions)

    def has_any_role(self, roles) -> bool:
        return not self.roles.isdisjoint(roles)


@dataclass(frozen=True)
class AccessResult:
    """Result of an access check."""

    decision: AccessDecision
    message: Optional[str] = None
    required_permissions: tuple[str, ...] = ()
    required_roles: tuple[str, ...] = ()

    @property
    def allowed(self) -> bool:
        return self.decision is AccessDecision.ALLOW

    @property
    def status_code(self) -> int:
        return int(_STATUS_BY_DECISION[self.decision])

    @classmethod
    def allow(cls) -> "AccessResult":
        """Create an allow result."""
        return cls(decision=AccessDecision.ALLOW)

    @classmethod
    def unauthenticated(cls) -> "AccessResult":
        return cls(decision=AccessDecision.UNAUTHENTICATED, message=AUTHENTICATION_REQUIRED)

    @classmethod
    def not_found(cls) -> "AccessResult":
        return cls(decision=AccessDecision.NOT_FOUND, message=RESOURCE_NOT_FOUND)

    @classmethod
    def forbidden(
        cls,
        message: str = RESOURCE_DENIED,
        required_permissions: tuple[str, ...] = (),
        required_roles: tuple[str, ...] = (),
    ) -> "AccessResult":
        """Create a deny result."""
        return cls(
            decision=AccessDecision.FORBIDDEN,
            message=message,
            required_permissions=required_permissions,
            required_roles=required_roles,
        )
