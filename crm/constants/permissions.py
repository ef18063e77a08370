"""Permission catalogue and system role definitions."""

ADMIN_ROLE = "Admin"
AUDITOR_ROLE = "Auditor"

# (resource, action, description)
PERMISSIONS: list[tuple[str, str, str]] = [
    ("contacts", "create", "Create contacts"),
    ("contacts", "read", "View contacts"),
    ("contacts", "update", "Update contacts"),
    ("contacts", "delete", "Delete contacts"),
    ("deals", "create", "Create deals"),
    ("deals", "read", "View deals"),
    ("deals", "update", "Update deals"),
    ("deals", "delete", "Delete deals"),
    ("tasks", "create", "Create tasks"),
    ("tasks", "read", "View tasks"),
    ("tasks", "update", "Update tasks"),
    ("tasks", "delete", "Delete tasks"),
    ("activities", "create", "Create activities"),
    ("activities", "read", "View activities"),
    ("users", "create", "Create users"),
    ("users", "read", "View users"),
    ("users", "update", "Update users"),
    ("users", "delete", "Delete users"),
    ("roles", "create", "Create roles"),
    ("roles", "read", "View roles"),
    ("roles", "update", "Update roles"),
    ("roles", "delete", "Delete roles"),
    ("teams", "create", "Create teams"),
    ("teams", "read", "View teams"),
    ("teams", "update", "Update teams"),
    ("teams", "delete", "Delete teams"),
    ("workflows", "create", "Create workflows"),
    ("workflows", "read", "View workflows"),
    ("workflows", "update", "Update workflows"),
    ("workflows", "delete", "Delete workflows"),
    ("emails", "create", "Create email templates"),
    ("emails", "read", "View emails"),
    ("emails", "send", "Send emails"),
    ("reports", "read", "View reports"),
]

ALL_PERMISSIONS = "ALL"

# name -> (description, permission names or ALL_PERMISSIONS)
SYSTEM_ROLES: dict[str, tuple[str, list[str] | str]] = {
    ADMIN_ROLE: ("Full system access with all permissions", ALL_PERMISSIONS),
    "Sales Manager": (
        "Manage sales team, deals, and contacts",
        [
            "contacts:create", "contacts:read", "contacts:update", "contacts:delete",
            "deals:create", "deals:read", "deals:update", "deals:delete",
            "tasks:create", "tasks:read", "tasks:update", "tasks:delete",
            "activities:create", "activities:read",
            "teams:read",
            "reports:read",
        ],
    ),
    "Salesperson": (
        "Manage own deals and contacts",
        [
            "contacts:create", "contacts:read", "contacts:update",
            "deals:create", "deals:read", "deals:update",
            "tasks:create", "tasks:read", "tasks:update",
            "activities:create", "activities:read",
        ],
    ),
    "Marketing": (
        "Manage marketing campaigns and contacts",
        [
            "contacts:create", "contacts:read", "contacts:update",
            "emails:create", "emails:read", "emails:send",
            "activities:create", "activities:read",
            "reports:read",
        ],
    ),
    "Support": (
        "View contacts and create tasks",
        [
            "contacts:read",
            "tasks:create", "tasks:read", "tasks:update",
            "activities:create", "activities:read",
        ],
    ),
    AUDITOR_ROLE: ("Read-only access to the audit trail", []),
}


def permission_name(resource: str, action: str) -> str:
    """Build a ``resource:action`` permission token."""
    return f"{resource}:{action}"
