"""Authorization policies system."""

from .access import (
    check_manager_access,
    check_ownership,
    check_permission,
    check_role,
    check_team_access,
)
from .base_policy import AccessDecision, AccessResult, Actor
from .guards import ensure_manager_access, ensure_team_access, require, require_ownership

__all__ = [
    "Actor",
    "AccessDecision",
    "AccessResult",
    "check_permission",
    "check_role",
    "check_ownership",
    "check_team_access",
    "check_manager_access",
    "require",
    "require_ownership",
    "ensure_team_access",
    "ensure_manager_access",
]
