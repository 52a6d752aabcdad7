from datetime import datetime, timezone
from supabase import Client
from app.modules.referentials.schemas import (
    DEFAULT_COLOR, ReferentialCreate, ReferentialUpdate, ReferentialResponse
)
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ReferentialService:
    """Referentials group the entities of a data model into named, coloured categories."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_referential(self, model_id: str, referential_data: ReferentialCreate, user_id: str) -> ReferentialResponse:
        if not referential_data.name or not referential_data.name.strip():
            raise HTTPException(status_code=400, detail="Referential name is required")
        try:
            result = self.supabase.table("referentials").insert({
                "data_model_id": model_id,
                "name": referential_data.name,
                "description": referential_data.description,
                "color": referential_data.color or DEFAULT_COLOR,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create referential")

            return ReferentialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_referentials(self, model_id: str) -> List[ReferentialResponse]:
        try:
            result = self.supabase.table("referentials")\
                .select("*")\
                .eq("data_model_id", model_id)\
                .order("name")\
                .execute()

            return [ReferentialResponse(**r) for r in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_referential(self, model_id: str, referential_id: str) -> ReferentialResponse:
        try:
            result = self.supabase.table("referentials")\
                .select("*")\
                .eq("id", referential_id)\
                .eq("data_model_id", model_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Referential not found")

            return ReferentialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_referential(
        self, model_id: str, referential_id: str, referential_data: ReferentialUpdate
    ) -> ReferentialResponse:
        update_data = referential_data.model_dump(exclude_none=True)
        if "name" in update_data and not update_data["name"].strip():
            raise HTTPException(status_code=400, detail="Referential name is required")
        if not update_data:
            return self.get_referential(model_id, referential_id)

        try:
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("referentials")\
                .update(update_data)\
                .eq("id", referential_id)\
                .eq("data_model_id", model_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Referential not found")

            return ReferentialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_referential(self, model_id: str, referential_id: str) -> bool:
        """Delete a referential; its entities stay, uncategorised"""
        try:
            self.get_referential(model_id, referential_id)

            detached = self.supabase.table("entities")\
                .update({"referential_id": None})\
                .eq("referential_id", referential_id)\
                .execute()

            self.supabase.table("referentials")\
                .delete()\
                .eq("id", referential_id)\
                .execute()

            logger.info(
                f"Referential {referential_id} deleted, {len(detached.data or [])} entities detached"
            )
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
