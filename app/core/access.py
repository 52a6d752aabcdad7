"""
Project role resolution and HTTP method authorization.

Every protected resource belongs to a project through a fixed ownership
chain (entity -> data model -> project). The caller's role on that project
is decided in this order:

1. superuser flag on the identity -> admin
2. identity is the project creator -> admin
3. explicit row in project_members -> the stored role, even one this
   module does not know (the method check then denies everything)

Resolution only reads. It is called once per request and never cached.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union
import logging

from pydantic import BaseModel
from supabase import Client

from app.config.permissions_config import ROLE_METHODS
from app.core.exceptions import (
    AccessControlError, NotMember, ResolutionFailed, ResourceNotFound, Unauthenticated
)
from app.modules.auth.schemas import CurrentUser

logger = logging.getLogger(__name__)


class ProjectRole(str, Enum):
    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"


class ResourceKind(str, Enum):
    PROJECT = "project"
    DATA_MODEL = "data_model"
    ENTITY = "entity"


class RoleSource(str, Enum):
    SUPERUSER = "superuser"
    CREATOR = "creator"
    MEMBERSHIP = "membership"


class ResourceRef(BaseModel):
    kind: ResourceKind
    id: str


class ResolvedAccess(BaseModel):
    # A stored membership role outside ProjectRole is kept as its raw string
    role: Union[ProjectRole, str]
    project_id: str
    source: RoleSource

    @property
    def role_name(self) -> str:
        return self.role.value if isinstance(self.role, ProjectRole) else self.role


def _fetch_one(supabase: Client, table: str, columns: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    query = supabase.table(table).select(columns)
    for column, value in filters.items():
        query = query.eq(column, value)
    result = query.limit(1).execute()
    return result.data[0] if result.data else None


def resolve_project(ref: ResourceRef, supabase: Client) -> Dict[str, Any]:
    """Walk the ownership chain of ref up to its project row"""
    if ref.kind == ResourceKind.ENTITY:
        entity = _fetch_one(supabase, "entities", "id, data_model_id", {"id": ref.id})
        if not entity or not entity.get("data_model_id"):
            raise ResourceNotFound("entity", ref.id)
        ref = ResourceRef(kind=ResourceKind.DATA_MODEL, id=entity["data_model_id"])

    if ref.kind == ResourceKind.DATA_MODEL:
        data_model = _fetch_one(supabase, "data_models", "id, project_id", {"id": ref.id})
        if not data_model or not data_model.get("project_id"):
            raise ResourceNotFound("data_model", ref.id)
        ref = ResourceRef(kind=ResourceKind.PROJECT, id=data_model["project_id"])

    project = _fetch_one(supabase, "projects", "id, created_by", {"id": ref.id})
    if not project:
        raise ResourceNotFound("project", ref.id)
    return project


def resolve_role(identity: Optional[CurrentUser], ref: ResourceRef, supabase: Client) -> ResolvedAccess:
    """
    Resolve the role identity holds on the project owning ref.

    Raises Unauthenticated, ResourceNotFound or NotMember when no role applies,
    and ResolutionFailed when the data layer itself errors.
    """
    if identity is None:
        raise Unauthenticated()

    try:
        project = resolve_project(ref, supabase)
        project_id = project["id"]

        if identity.is_superuser:
            return ResolvedAccess(role=ProjectRole.ADMIN, project_id=project_id, source=RoleSource.SUPERUSER)

        if project.get("created_by") == identity.id:
            return ResolvedAccess(role=ProjectRole.ADMIN, project_id=project_id, source=RoleSource.CREATOR)

        membership = _fetch_one(
            supabase,
            "project_members",
            "role",
            {"project_id": project_id, "user_id": identity.id}
        )
    except AccessControlError:
        raise
    except Exception as e:
        logger.error(f"Error resolving role for user {identity.id} on {ref.kind.value} {ref.id}: {e}")
        raise ResolutionFailed() from e

    if not membership:
        raise NotMember(project_id, identity.id)

    stored_role = membership.get("role")
    try:
        role = ProjectRole(stored_role)
    except ValueError:
        # Kept as-is; is_method_allowed denies it every method
        logger.warning(
            f"Unrecognized role {stored_role!r} for user {identity.id} in project {project_id}"
        )
        role = str(stored_role or "")

    return ResolvedAccess(role=role, project_id=project_id, source=RoleSource.MEMBERSHIP)


def is_method_allowed(method: Optional[str], role: Optional[Union[ProjectRole, str]]) -> bool:
    """Map (method, role) to permit/deny. Unknown roles and methods are denied."""
    if not method or not isinstance(role, str):
        return False
    allowed_methods = ROLE_METHODS.get(role.value if isinstance(role, Enum) else role)
    if allowed_methods is None:
        return False
    return method.upper() in allowed_methods
