"""
Access control errors raised by the role resolver and the request gate.
Rendered to JSON by the handler registered in app.main.
"""

from typing import Dict, Optional


class AccessControlError(Exception):
    status_code = 500
    detail = "Access control error"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class Unauthenticated(AccessControlError):
    status_code = 401
    detail = "Not authenticated"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class ResourceNotFound(AccessControlError):
    status_code = 404

    def __init__(self, kind: str, resource_id: str):
        self.kind = kind
        self.resource_id = resource_id
        super().__init__(f"{kind.replace('_', ' ').capitalize()} not found")


class NotMember(AccessControlError):
    status_code = 403
    detail = "Not a member of this project"

    def __init__(self, project_id: str, user_id: str):
        self.project_id = project_id
        self.user_id = user_id
        super().__init__()


class InsufficientPermission(AccessControlError):
    status_code = 403

    def __init__(self, role: Optional[str], method: str):
        self.role = role
        self.method = method
        super().__init__(f"Role '{role}' does not have sufficient permissions for {method}")


class ResolutionFailed(AccessControlError):
    """Data layer failure while walking the ownership chain"""
    status_code = 500
    detail = "Error checking permissions"
