from datetime import datetime, timezone
from supabase import Client
from app.modules.attributes.schemas import AttributeCreate, AttributeUpdate, AttributeResponse
from typing import List
from fastapi import HTTPException


class AttributeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_attribute(self, entity_id: str, attribute_data: AttributeCreate) -> AttributeResponse:
        """Add an attribute to an entity"""
        if not attribute_data.name or not attribute_data.name.strip():
            raise HTTPException(status_code=400, detail="Attribute name is required")
        if attribute_data.is_calculated and not attribute_data.calculation_rule:
            raise HTTPException(status_code=400, detail="Calculated attributes require a calculation rule")
        try:
            payload = attribute_data.model_dump()
            payload["entity_id"] = entity_id
            result = self.supabase.table("attributes").insert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create attribute")

            return AttributeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_attributes(self, entity_id: str) -> List[AttributeResponse]:
        """List attributes of an entity"""
        try:
            result = self.supabase.table("attributes")\
                .select("*")\
                .eq("entity_id", entity_id)\
                .order("name")\
                .execute()

            return [AttributeResponse(**attribute) for attribute in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_attribute(self, entity_id: str, attribute_id: str, attribute_data: AttributeUpdate) -> AttributeResponse:
        """Update an attribute; it must belong to entity_id"""
        try:
            current = self.supabase.table("attributes")\
                .select("*")\
                .eq("id", attribute_id)\
                .eq("entity_id", entity_id)\
                .limit(1)\
                .execute()

            if not current.data:
                raise HTTPException(status_code=404, detail="Attribute not found")

            update_data = attribute_data.model_dump(exclude_none=True)
            if "name" in update_data and not update_data["name"].strip():
                raise HTTPException(status_code=400, detail="Attribute name is required")

            merged = {**current.data[0], **update_data}
            if merged.get("is_calculated") and not merged.get("calculation_rule"):
                raise HTTPException(status_code=400, detail="Calculated attributes require a calculation rule")

            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("attributes")\
                .update(update_data)\
                .eq("id", attribute_id)\
                .eq("entity_id", entity_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Attribute not found")

            return AttributeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_attribute(self, entity_id: str, attribute_id: str) -> bool:
        """Delete an attribute; it must belong to entity_id"""
        try:
            result = self.supabase.table("attributes")\
                .delete()\
                .eq("id", attribute_id)\
                .eq("entity_id", entity_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Attribute not found")

            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
