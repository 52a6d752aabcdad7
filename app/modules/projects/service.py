from datetime import datetime, timezone
from supabase import Client
from app.modules.auth.schemas import CurrentUser
from app.modules.data_models.service import DataModelService
from app.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectWithModelsResponse,
    MemberAdd, MemberUpdate, MemberResponse
)
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_project(self, project_data: ProjectCreate, user_id: str) -> ProjectResponse:
        """Create a new project owned by user_id. No membership row is written for the creator."""
        if not project_data.name or not project_data.name.strip():
            raise HTTPException(status_code=400, detail="Project name is required")
        try:
            result = self.supabase.table("projects").insert({
                "name": project_data.name,
                "description": project_data.description,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create project")

            logger.info(f"Project {result.data[0]['id']} created by user {user_id}")
            return ProjectResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_project_by_id(self, project_id: str) -> ProjectResponse:
        """Get project by ID"""
        try:
            result = self.supabase.table("projects")\
                .select("*")\
                .eq("id", project_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Project not found")

            return ProjectResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_project_with_models(self, project_id: str) -> ProjectWithModelsResponse:
        """Get project with its data models"""
        try:
            project = self.get_project_by_id(project_id)

            models_result = self.supabase.table("data_models")\
                .select("*")\
                .eq("project_id", project_id)\
                .order("updated_at", desc=True)\
                .execute()

            project_data = project.model_dump()
            project_data["data_models"] = models_result.data or []

            return ProjectWithModelsResponse(**project_data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_project(self, project_id: str, project_data: ProjectUpdate) -> ProjectResponse:
        """Update project name and/or description"""
        update_data = {}
        if project_data.name is not None:
            if not project_data.name.strip():
                raise HTTPException(status_code=400, detail="Project name is required")
            update_data["name"] = project_data.name
        if project_data.description is not None:
            update_data["description"] = project_data.description

        if not update_data:
            raise HTTPException(
                status_code=400,
                detail="At least one field (name or description) must be provided"
            )

        try:
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("projects")\
                .update(update_data)\
                .eq("id", project_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Project not found")

            return ProjectResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_projects(self, user: CurrentUser, limit: int = 50, offset: int = 0) -> List[ProjectResponse]:
        """List projects: all for a superuser, otherwise projects the user created or is a member of"""
        try:
            if user.is_superuser:
                query = self.supabase.table("projects").select("*")
            else:
                members_result = self.supabase.table("project_members")\
                    .select("project_id")\
                    .eq("user_id", user.id)\
                    .execute()
                created_result = self.supabase.table("projects")\
                    .select("id")\
                    .eq("created_by", user.id)\
                    .execute()

                project_ids = {m["project_id"] for m in members_result.data or []}
                project_ids.update(p["id"] for p in created_result.data or [])
                if not project_ids:
                    return []

                query = self.supabase.table("projects").select("*").in_("id", sorted(project_ids))

            result = query.order("updated_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [ProjectResponse(**project) for project in result.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_project(self, project_id: str) -> bool:
        """Delete project with its data models, then its memberships"""
        try:
            models_result = self.supabase.table("data_models")\
                .select("id")\
                .eq("project_id", project_id)\
                .execute()

            data_model_service = DataModelService(self.supabase)
            for model in models_result.data or []:
                data_model_service.delete_data_model(model["id"])

            # Memberships are removed only after the project contents
            self.supabase.table("project_members")\
                .delete()\
                .eq("project_id", project_id)\
                .execute()

            result = self.supabase.table("projects")\
                .delete()\
                .eq("id", project_id)\
                .execute()

            logger.info(f"Project {project_id} deleted with {len(models_result.data or [])} data models")
            return len(result.data) > 0
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_members(self, project_id: str) -> List[MemberResponse]:
        """List all explicit members of a project"""
        try:
            result = self.supabase.table("project_members")\
                .select("*")\
                .eq("project_id", project_id)\
                .execute()

            return [MemberResponse(**member) for member in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def add_member(self, project_id: str, member_data: MemberAdd) -> MemberResponse:
        """Add a user to the project with the given role"""
        try:
            project = self.get_project_by_id(project_id)
            if project.created_by == member_data.user_id:
                raise HTTPException(status_code=400, detail="Project creator already has admin access")

            existing = self.supabase.table("project_members")\
                .select("id")\
                .eq("project_id", project_id)\
                .eq("user_id", member_data.user_id)\
                .execute()

            if existing.data:
                raise HTTPException(status_code=400, detail="User is already a member of this project")

            result = self.supabase.table("project_members").insert({
                "project_id": project_id,
                "user_id": member_data.user_id,
                "role": member_data.role.value,
                "email": member_data.email
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add member")

            logger.info(f"User {member_data.user_id} added to project {project_id} as {member_data.role.value}")
            return MemberResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_member_role(self, project_id: str, user_id: str, member_data: MemberUpdate) -> MemberResponse:
        """Change the role of an existing member"""
        try:
            result = self.supabase.table("project_members")\
                .update({"role": member_data.role.value})\
                .eq("project_id", project_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Member not found")

            logger.info(f"User {user_id} role in project {project_id} changed to {member_data.role.value}")
            return MemberResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def remove_member(self, project_id: str, user_id: str) -> bool:
        """Remove a member from the project"""
        try:
            result = self.supabase.table("project_members")\
                .delete()\
                .eq("project_id", project_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Member not found")

            logger.info(f"User {user_id} removed from project {project_id}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
