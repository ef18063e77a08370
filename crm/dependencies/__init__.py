"""FastAPI dependencies."""

from .auth import (
    get_current_actor,
    get_current_user,
    get_optional_actor,
    require_permission,
    require_role,
)
from .database import get_db

__all__ = [
    "get_current_user",
    "get_current_actor",
    "get_optional_actor",
    "require_permission",
    "require_role",
    "get_db",
]
