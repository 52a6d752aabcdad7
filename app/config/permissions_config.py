"""
Project Roles Configuration
This config defines the capability matrix for project roles.
Used by the method authorizer, the /projects/{id}/access endpoint and
the member management routes.
"""

# HTTP methods grouped by the action they perform on a project's resources
METHOD_ACTIONS = {
    "GET": "read",
    "POST": "create",
    "PUT": "update",
    "PATCH": "update",
    "DELETE": "delete",
}

# Role definitions, highest first
ROLE_TYPES = {
    "admin": {
        "actions": ["read", "create", "update", "delete"],
        "description": "Full access to the project, its data models and members"
    },
    "editor": {
        "actions": ["read", "create", "update"],
        "description": "Can read, create and modify data models but not delete"
    },
    "viewer": {
        "actions": ["read"],
        "description": "Read-only access to the project"
    }
}


def get_role_methods():
    """
    Returns the set of HTTP methods each role may invoke
    Format: {
        "admin": {"GET", "POST", "PUT", "PATCH", "DELETE"},
        "editor": {"GET", "POST", "PUT", "PATCH"},
        "viewer": {"GET"}
    }
    """
    role_methods = {}
    for role_name, role_config in ROLE_TYPES.items():
        allowed = set()
        for method, action in METHOD_ACTIONS.items():
            if action in role_config["actions"]:
                allowed.add(method)
        role_methods[role_name] = frozenset(allowed)
    return role_methods


def get_role_capabilities(role_name):
    """Capability flags for a role, all False for an unknown or missing role"""
    role_name = getattr(role_name, "value", role_name)
    actions = ROLE_TYPES.get(role_name, {}).get("actions", []) if isinstance(role_name, str) else []
    return {
        "can_read": "read" in actions,
        "can_create": "create" in actions,
        "can_update": "update" in actions,
        "can_delete": "delete" in actions,
    }


ROLE_METHODS = get_role_methods()
