from fastapi import APIRouter, Depends
from app.core.access import ResourceKind
from app.core.dependencies import AccessGrant, require_access
from app.database.supabase_client import get_service_supabase
from app.modules.referentials.schemas import (
    ReferentialCreate, ReferentialUpdate, ReferentialResponse
)
from app.modules.referentials.service import ReferentialService
from supabase import Client
from typing import List

router = APIRouter(prefix="/models/{model_id}/referentials", tags=["referentials"])

model_access = require_access(ResourceKind.DATA_MODEL, "model_id")


def get_referential_service(supabase: Client = Depends(get_service_supabase)) -> ReferentialService:
    return ReferentialService(supabase)


@router.get("", response_model=List[ReferentialResponse])
async def list_referentials(
    model_id: str,
    grant: AccessGrant = Depends(model_access),
    service: ReferentialService = Depends(get_referential_service)
):
    return service.list_referentials(model_id)


@router.post("", response_model=ReferentialResponse, status_code=201)
async def create_referential(
    model_id: str,
    referential_data: ReferentialCreate,
    grant: AccessGrant = Depends(model_access),
    service: ReferentialService = Depends(get_referential_service)
):
    return service.create_referential(model_id, referential_data, grant.user.id)


@router.get("/{referential_id}", response_model=ReferentialResponse)
async def get_referential(
    model_id: str,
    referential_id: str,
    grant: AccessGrant = Depends(model_access),
    service: ReferentialService = Depends(get_referential_service)
):
    return service.get_referential(model_id, referential_id)


@router.put("/{referential_id}", response_model=ReferentialResponse)
@router.patch("/{referential_id}", response_model=ReferentialResponse)
async def update_referential(
    model_id: str,
    referential_id: str,
    referential_data: ReferentialUpdate,
    grant: AccessGrant = Depends(model_access),
    service: ReferentialService = Depends(get_referential_service)
):
    return service.update_referential(model_id, referential_id, referential_data)


@router.delete("/{referential_id}", status_code=204)
async def delete_referential(
    model_id: str,
    referential_id: str,
    grant: AccessGrant = Depends(model_access),
    service: ReferentialService = Depends(get_referential_service)
):
    """Delete a referential (admin); member entities are kept"""
    service.delete_referential(model_id, referential_id)
    return None
