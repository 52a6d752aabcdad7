"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from app.config import settings
from app.core.access import (
    ProjectRole, ResourceKind, ResourceRef, RoleSource, is_method_allowed, resolve_role
)
from app.core.exceptions import InsufficientPermission, NotMember, ResourceNotFound, Unauthenticated
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.schemas import CurrentUser
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class AccessGrant(BaseModel):
    """Outcome of a permitted request: who the caller is and what they hold on the project"""
    user: CurrentUser
    project_id: str
    role: ProjectRole
    source: RoleSource
    resource: ResourceRef


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[CurrentUser]:
    """Caller identity from the bearer token, or None when no token was sent"""
    if credentials is None or not credentials.credentials:
        return None
    return auth_service.get_current_user(credentials.credentials)


def get_current_user(user: Optional[CurrentUser] = Depends(get_optional_user)) -> CurrentUser:
    """Require an authenticated caller"""
    if user is None:
        raise Unauthenticated()
    return user


def require_access(kind: ResourceKind, param: str, admin_only: bool = False):
    """
    Factory for the request gate dependency.

    Resolves the caller's role on the project owning the resource named by the
    path parameter `param`, then checks the request method against that role.
    With admin_only the resolved role must also be admin (access management).
    """
    def gate(
        request: Request,
        user: Optional[CurrentUser] = Depends(get_optional_user),
        supabase: Client = Depends(get_service_supabase)
    ) -> AccessGrant:
        ref = ResourceRef(kind=kind, id=request.path_params[param])
        try:
            resolved = resolve_role(user, ref, supabase)
        except NotMember as e:
            logger.info(f"User {e.user_id} is not a member of project {e.project_id}")
            if settings.mask_non_member_access:
                raise ResourceNotFound(kind.value, ref.id) from e
            raise

        method = request.method
        allowed = is_method_allowed(method, resolved.role)
        if allowed and admin_only:
            allowed = resolved.role == ProjectRole.ADMIN
        if not allowed:
            logger.warning(
                f"Denied {method} {request.url.path} for user {user.id}: "
                f"role {resolved.role_name!r} on project {resolved.project_id}"
            )
            raise InsufficientPermission(resolved.role_name, method)

        return AccessGrant(
            user=user,
            project_id=resolved.project_id,
            role=resolved.role,
            source=resolved.source,
            resource=ref,
        )
    return gate
