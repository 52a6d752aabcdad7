from datetime import datetime, timezone
from supabase import Client
from app.modules.entities.schemas import EntityCreate, EntityUpdate, EntityResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class EntityService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _check_referential(self, model_id: str, referential_id: str):
        """A referential can only categorise entities of its own data model"""
        result = self.supabase.table("referentials")\
            .select("id")\
            .eq("id", referential_id)\
            .eq("data_model_id", model_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=400, detail="Referential does not belong to this data model")

    def create_entity(self, model_id: str, entity_data: EntityCreate) -> EntityResponse:
        """Create an entity in a data model"""
        if not entity_data.name or not entity_data.name.strip():
            raise HTTPException(status_code=400, detail="Entity name is required")
        try:
            if entity_data.referential_id:
                self._check_referential(model_id, entity_data.referential_id)

            result = self.supabase.table("entities").insert({
                "data_model_id": model_id,
                "name": entity_data.name,
                "description": entity_data.description,
                "position_x": entity_data.position_x,
                "position_y": entity_data.position_y,
                "referential_id": entity_data.referential_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create entity")

            return EntityResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_entities(self, model_id: str) -> List[EntityResponse]:
        """List entities of a data model"""
        try:
            result = self.supabase.table("entities")\
                .select("*")\
                .eq("data_model_id", model_id)\
                .order("name")\
                .execute()

            return [EntityResponse(**entity) for entity in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_entity_by_id(self, entity_id: str) -> EntityResponse:
        """Get entity by ID"""
        try:
            result = self.supabase.table("entities")\
                .select("*")\
                .eq("id", entity_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Entity not found")

            return EntityResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_entity(self, entity_id: str, entity_data: EntityUpdate) -> EntityResponse:
        """Update entity fields. data_model_id is never updatable."""
        try:
            update_data = entity_data.model_dump(exclude_none=True)
            if "name" in update_data and not update_data["name"].strip():
                raise HTTPException(status_code=400, detail="Entity name is required")

            if not update_data:
                return self.get_entity_by_id(entity_id)

            if "referential_id" in update_data:
                entity = self.get_entity_by_id(entity_id)
                self._check_referential(entity.data_model_id, update_data["referential_id"])

            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("entities")\
                .update(update_data)\
                .eq("id", entity_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Entity not found")

            return EntityResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_entity(self, entity_id: str) -> bool:
        """Delete entity with its relationships and attributes"""
        try:
            for column in ("source_entity_id", "target_entity_id"):
                self.supabase.table("relationships")\
                    .delete()\
                    .eq(column, entity_id)\
                    .execute()

            attributes_result = self.supabase.table("attributes")\
                .delete()\
                .eq("entity_id", entity_id)\
                .execute()
            logger.info(f"Deleted {len(attributes_result.data or [])} attributes of entity {entity_id}")

            result = self.supabase.table("entities")\
                .delete()\
                .eq("id", entity_id)\
                .execute()

            return len(result.data) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
