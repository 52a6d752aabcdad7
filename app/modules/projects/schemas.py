from pydantic import BaseModel, EmailStr
from typing import Optional, List, Dict
from datetime import datetime
from app.core.access import ProjectRole, RoleSource


class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ProjectResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProjectWithModelsResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_by: Optional[str] = None
    data_models: List[dict]  # DataModelResponse rows, most recently updated first
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProjectAccessResponse(BaseModel):
    project_id: str
    role: ProjectRole
    source: RoleSource
    is_superuser: bool
    permissions: Dict[str, bool]  # can_read, can_create, can_update, can_delete


class MemberAdd(BaseModel):
    user_id: str
    role: ProjectRole = ProjectRole.VIEWER
    email: Optional[EmailStr] = None


class MemberUpdate(BaseModel):
    role: ProjectRole


class MemberResponse(BaseModel):
    id: Optional[str] = None
    project_id: str
    user_id: str
    role: str
    email: Optional[str] = None
    joined_at: Optional[datetime] = None

    class Config:
        from_attributes = True
