"""API routers."""

from . import activities, audit, auth, contacts, deals, emails, reports, roles, tasks, teams, users, workflows

__all__ = [
    "activities",
    "audit",
    "auth",
    "contacts",
    "deals",
    "emails",
    "reports",
    "roles",
    "tasks",
    "teams",
    "users",
    "workflows",
]
