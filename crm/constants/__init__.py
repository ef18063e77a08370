"""Constants package."""

from .permissions import ADMIN_ROLE, AUDITOR_ROLE, PERMISSIONS, SYSTEM_ROLES
from .status_codes import AccessStatus, APIStatus

__all__ = [
    "APIStatus",
    "AccessStatus",
    "ADMIN_ROLE",
    "AUDITOR_ROLE",
    "PERMISSIONS",
    "SYSTEM_ROLES",
]
