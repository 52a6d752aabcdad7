from fastapi import APIRouter, Depends
from app.core.access import ResourceKind
from app.core.dependencies import AccessGrant, require_access
from app.database.supabase_client import get_service_supabase
from app.modules.attributes.schemas import AttributeCreate, AttributeUpdate, AttributeResponse
from app.modules.attributes.service import AttributeService
from supabase import Client
from typing import List

router = APIRouter(prefix="/entities/{entity_id}/attributes", tags=["attributes"])

entity_access = require_access(ResourceKind.ENTITY, "entity_id")


def get_attribute_service(supabase: Client = Depends(get_service_supabase)) -> AttributeService:
    return AttributeService(supabase)


@router.get("", response_model=List[AttributeResponse])
async def list_attributes(
    entity_id: str,
    grant: AccessGrant = Depends(entity_access),
    service: AttributeService = Depends(get_attribute_service)
):
    return service.list_attributes(entity_id)


@router.post("", response_model=AttributeResponse, status_code=201)
async def create_attribute(
    entity_id: str,
    attribute_data: AttributeCreate,
    grant: AccessGrant = Depends(entity_access),
    service: AttributeService = Depends(get_attribute_service)
):
    return service.create_attribute(entity_id, attribute_data)


@router.patch("/{attribute_id}", response_model=AttributeResponse)
async def update_attribute(
    entity_id: str,
    attribute_id: str,
    attribute_data: AttributeUpdate,
    grant: AccessGrant = Depends(entity_access),
    service: AttributeService = Depends(get_attribute_service)
):
    return service.update_attribute(entity_id, attribute_id, attribute_data)


@router.delete("/{attribute_id}", status_code=204)
async def delete_attribute(
    entity_id: str,
    attribute_id: str,
    grant: AccessGrant = Depends(entity_access),
    service: AttributeService = Depends(get_attribute_service)
):
    service.delete_attribute(entity_id, attribute_id)
    return None
