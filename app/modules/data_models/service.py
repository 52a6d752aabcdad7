from datetime import datetime, timezone
from supabase import Client
from app.modules.data_models.schemas import (
    DataModelCreate, DataModelUpdate, DataModelResponse, DataModelExport
)
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class DataModelService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_data_model(self, project_id: str, model_data: DataModelCreate, user_id: str) -> DataModelResponse:
        """Create a data model inside a project"""
        if not model_data.name or not model_data.name.strip():
            raise HTTPException(status_code=400, detail="Data model name is required")
        try:
            result = self.supabase.table("data_models").insert({
                "project_id": project_id,
                "name": model_data.name,
                "description": model_data.description,
                "version": model_data.version or "1.0",
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create data model")

            return DataModelResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_data_models(self, project_id: str) -> List[DataModelResponse]:
        """List data models of a project, most recently updated first"""
        try:
            result = self.supabase.table("data_models")\
                .select("*")\
                .eq("project_id", project_id)\
                .order("updated_at", desc=True)\
                .execute()

            return [DataModelResponse(**model) for model in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_data_model_by_id(self, model_id: str) -> DataModelResponse:
        """Get data model by ID"""
        try:
            result = self.supabase.table("data_models")\
                .select("*")\
                .eq("id", model_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Data model not found")

            return DataModelResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_data_model(self, model_id: str, model_data: DataModelUpdate) -> DataModelResponse:
        """Update data model. project_id is never updatable."""
        if model_data.name is not None and not model_data.name.strip():
            raise HTTPException(status_code=400, detail="Data model name is required")
        try:
            update_data = {}
            if model_data.name:
                update_data["name"] = model_data.name
            if model_data.description is not None:
                update_data["description"] = model_data.description
            if model_data.version:
                update_data["version"] = model_data.version

            if not update_data:
                # No changes, return existing
                return self.get_data_model_by_id(model_id)

            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("data_models")\
                .update(update_data)\
                .eq("id", model_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Data model not found")

            return DataModelResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_data_model(self, model_id: str) -> bool:
        """Delete data model with its relationships, entities, attributes and referentials"""
        try:
            self.supabase.table("relationships")\
                .delete()\
                .eq("data_model_id", model_id)\
                .execute()

            entities_result = self.supabase.table("entities")\
                .select("id")\
                .eq("data_model_id", model_id)\
                .execute()
            entity_ids = [e["id"] for e in entities_result.data or []]

            if entity_ids:
                self.supabase.table("attributes")\
                    .delete()\
                    .in_("entity_id", entity_ids)\
                    .execute()
                self.supabase.table("entities")\
                    .delete()\
                    .eq("data_model_id", model_id)\
                    .execute()

            self.supabase.table("referentials")\
                .delete()\
                .eq("data_model_id", model_id)\
                .execute()

            result = self.supabase.table("data_models")\
                .delete()\
                .eq("id", model_id)\
                .execute()

            logger.info(f"Data model {model_id} deleted with {len(entity_ids)} entities")
            return len(result.data) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def export_data_model(self, model_id: str) -> DataModelExport:
        """Build a JSON export of a data model with its entities, attributes, relationships and referentials"""
        try:
            data_model = self.get_data_model_by_id(model_id)

            entities_result = self.supabase.table("entities")\
                .select("*")\
                .eq("data_model_id", model_id)\
                .order("name")\
                .execute()
            entities = entities_result.data or []

            attributes_by_entity = {}
            if entities:
                attributes_result = self.supabase.table("attributes")\
                    .select("*")\
                    .in_("entity_id", [e["id"] for e in entities])\
                    .order("name")\
                    .execute()
                for attribute in attributes_result.data or []:
                    attributes_by_entity.setdefault(attribute["entity_id"], []).append(attribute)

            exported_entities = []
            for entity in entities:
                entity_data = dict(entity)
                entity_data["attributes"] = attributes_by_entity.get(entity["id"], [])
                exported_entities.append(entity_data)

            relationships_result = self.supabase.table("relationships")\
                .select("*")\
                .eq("data_model_id", model_id)\
                .order("created_at")\
                .execute()

            referentials_result = self.supabase.table("referentials")\
                .select("*")\
                .eq("data_model_id", model_id)\
                .order("name")\
                .execute()

            return DataModelExport(
                exported_at=datetime.now(timezone.utc),
                data_model=data_model,
                entities=exported_entities,
                relationships=relationships_result.data or [],
                referentials=referentials_result.data or []
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
