"""Database models."""

from .activity import Activity
from .audit_log import AuditLog
from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .contact import Contact
from .deal import Deal, DealStage
from .email import EmailLog, EmailTemplate
from .role import Permission, Role, role_permissions, user_roles
from .task import Task, TaskPriority, TaskStatus
from .team import Team, TeamMember, TeamRole
from .user import User
from .workflow import Workflow

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "User",
    "Role",
    "Permission",
    "user_roles",
    "role_permissions",
    "Team",
    "TeamMember",
    "TeamRole",
    "Contact",
    "Deal",
    "DealStage",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Activity",
    "AuditLog",
    "Workflow",
    "EmailTemplate",
    "EmailLog",
]
