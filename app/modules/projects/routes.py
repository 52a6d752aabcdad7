from fastapi import APIRouter, Depends
from app.config.permissions_config import get_role_capabilities
from app.core.access import ResourceKind
from app.core.dependencies import AccessGrant, get_current_user, require_access
from app.database.supabase_client import get_service_supabase
from app.modules.auth.schemas import CurrentUser
from app.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectWithModelsResponse,
    ProjectAccessResponse, MemberAdd, MemberUpdate, MemberResponse
)
from app.modules.projects.service import ProjectService
from supabase import Client
from typing import List

router = APIRouter(prefix="/projects", tags=["projects"])

project_access = require_access(ResourceKind.PROJECT, "project_id")
project_admin = require_access(ResourceKind.PROJECT, "project_id", admin_only=True)


def get_project_service(supabase: Client = Depends(get_service_supabase)) -> ProjectService:
    return ProjectService(supabase)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    limit: int = 50,
    offset: int = 0,
    current_user: CurrentUser = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service)
):
    """List projects the user created or is a member of (all projects for a superuser)"""
    return service.list_projects(current_user, limit=limit, offset=offset)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service)
):
    """Create a new project; the creator is its implicit admin"""
    return service.create_project(project_data, current_user.id)


@router.get("/{project_id}", response_model=ProjectWithModelsResponse)
async def get_project(
    project_id: str,
    grant: AccessGrant = Depends(project_access),
    service: ProjectService = Depends(get_project_service)
):
    """Get project with its data models"""
    return service.get_project_with_models(project_id)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    grant: AccessGrant = Depends(project_access),
    service: ProjectService = Depends(get_project_service)
):
    """Rename or re-describe a project (editor or admin)"""
    return service.update_project(project_id, project_data)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    grant: AccessGrant = Depends(project_access),
    service: ProjectService = Depends(get_project_service)
):
    """Delete a project (admin)"""
    service.delete_project(project_id)
    return None


@router.get("/{project_id}/access", response_model=ProjectAccessResponse)
async def get_project_access(
    project_id: str,
    grant: AccessGrant = Depends(project_access)
):
    """The caller's effective role on the project and what it allows"""
    return ProjectAccessResponse(
        project_id=grant.project_id,
        role=grant.role,
        source=grant.source,
        is_superuser=grant.user.is_superuser,
        permissions=get_role_capabilities(grant.role)
    )


@router.get("/{project_id}/members", response_model=List[MemberResponse])
async def list_members(
    project_id: str,
    grant: AccessGrant = Depends(project_access),
    service: ProjectService = Depends(get_project_service)
):
    """List project members"""
    return service.list_members(project_id)


@router.post("/{project_id}/members", response_model=MemberResponse, status_code=201)
async def add_member(
    project_id: str,
    member_data: MemberAdd,
    grant: AccessGrant = Depends(project_admin),
    service: ProjectService = Depends(get_project_service)
):
    """Add a user to the project (admin)"""
    return service.add_member(project_id, member_data)


@router.patch("/{project_id}/members/{user_id}", response_model=MemberResponse)
async def change_member_access(
    project_id: str,
    user_id: str,
    member_data: MemberUpdate,
    grant: AccessGrant = Depends(project_admin),
    service: ProjectService = Depends(get_project_service)
):
    """Change a member's role (admin)"""
    return service.update_member_role(project_id, user_id, member_data)


@router.delete("/{project_id}/members/{user_id}", status_code=204)
async def remove_member(
    project_id: str,
    user_id: str,
    grant: AccessGrant = Depends(project_admin),
    service: ProjectService = Depends(get_project_service)
):
    """Remove a user from the project (admin)"""
    service.remove_member(project_id, user_id)
    return None
