from datetime import datetime, timezone
from supabase import Client
from app.modules.relationships.schemas import (
    RelationshipCreate, RelationshipUpdate, RelationshipResponse
)
from typing import Iterable, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class RelationshipService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _check_entities(self, model_id: str, entity_ids: Iterable[str]):
        """Both ends of a relationship must be entities of the same data model"""
        wanted = set(entity_ids)
        result = self.supabase.table("entities")\
            .select("id")\
            .eq("data_model_id", model_id)\
            .in_("id", sorted(wanted))\
            .execute()
        found = {e["id"] for e in result.data or []}
        if found != wanted:
            raise HTTPException(
                status_code=400,
                detail="Relationship entities must belong to the data model"
            )

    def create_relationship(self, model_id: str, relationship_data: RelationshipCreate) -> RelationshipResponse:
        """Link two entities of a data model"""
        try:
            self._check_entities(
                model_id, [relationship_data.source_entity_id, relationship_data.target_entity_id]
            )
            payload = relationship_data.model_dump(mode="json")
            payload["data_model_id"] = model_id
            result = self.supabase.table("relationships").insert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create relationship")

            return RelationshipResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_relationships(self, model_id: str, entity_id: Optional[str] = None) -> List[RelationshipResponse]:
        """List relationships of a data model, optionally only those touching entity_id"""
        try:
            result = self.supabase.table("relationships")\
                .select("*")\
                .eq("data_model_id", model_id)\
                .order("created_at")\
                .execute()

            rows = result.data or []
            if entity_id:
                rows = [
                    r for r in rows
                    if entity_id in (r.get("source_entity_id"), r.get("target_entity_id"))
                ]
            return [RelationshipResponse(**r) for r in rows]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_relationship(self, model_id: str, relationship_id: str) -> RelationshipResponse:
        try:
            result = self.supabase.table("relationships")\
                .select("*")\
                .eq("id", relationship_id)\
                .eq("data_model_id", model_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Relationship not found")

            return RelationshipResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_relationship(
        self, model_id: str, relationship_id: str, relationship_data: RelationshipUpdate
    ) -> RelationshipResponse:
        """Update a relationship; it must belong to model_id"""
        try:
            current = self.get_relationship(model_id, relationship_id)
            update_data = relationship_data.model_dump(mode="json", exclude_none=True)
            if not update_data:
                return current

            if "source_entity_id" in update_data or "target_entity_id" in update_data:
                self._check_entities(model_id, [
                    update_data.get("source_entity_id", current.source_entity_id),
                    update_data.get("target_entity_id", current.target_entity_id),
                ])

            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("relationships")\
                .update(update_data)\
                .eq("id", relationship_id)\
                .eq("data_model_id", model_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Relationship not found")

            return RelationshipResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_relationship(self, model_id: str, relationship_id: str) -> bool:
        try:
            result = self.supabase.table("relationships")\
                .delete()\
                .eq("id", relationship_id)\
                .eq("data_model_id", model_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Relationship not found")

            logger.info(f"Relationship {relationship_id} deleted from data model {model_id}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
