from fastapi import APIRouter, Depends
from app.core.access import ResourceKind
from app.core.dependencies import AccessGrant, require_access
from app.database.supabase_client import get_service_supabase
from app.modules.entities.schemas import EntityCreate, EntityUpdate, EntityResponse
from app.modules.entities.service import EntityService
from supabase import Client
from typing import List

router = APIRouter(tags=["entities"])

model_access = require_access(ResourceKind.DATA_MODEL, "model_id")
entity_access = require_access(ResourceKind.ENTITY, "entity_id")


def get_entity_service(supabase: Client = Depends(get_service_supabase)) -> EntityService:
    return EntityService(supabase)


@router.get("/models/{model_id}/entities", response_model=List[EntityResponse])
async def list_entities(
    model_id: str,
    grant: AccessGrant = Depends(model_access),
    service: EntityService = Depends(get_entity_service)
):
    return service.list_entities(model_id)


@router.post("/models/{model_id}/entities", response_model=EntityResponse, status_code=201)
async def create_entity(
    model_id: str,
    entity_data: EntityCreate,
    grant: AccessGrant = Depends(model_access),
    service: EntityService = Depends(get_entity_service)
):
    """Create an entity in a data model (editor or admin)"""
    return service.create_entity(model_id, entity_data)


@router.get("/entities/{entity_id}", response_model=EntityResponse)
async def get_entity(
    entity_id: str,
    grant: AccessGrant = Depends(entity_access),
    service: EntityService = Depends(get_entity_service)
):
    return service.get_entity_by_id(entity_id)


@router.put("/entities/{entity_id}", response_model=EntityResponse)
@router.patch("/entities/{entity_id}", response_model=EntityResponse)
async def update_entity(
    entity_id: str,
    entity_data: EntityUpdate,
    grant: AccessGrant = Depends(entity_access),
    service: EntityService = Depends(get_entity_service)
):
    return service.update_entity(entity_id, entity_data)


@router.delete("/entities/{entity_id}", status_code=204)
async def delete_entity(
    entity_id: str,
    grant: AccessGrant = Depends(entity_access),
    service: EntityService = Depends(get_entity_service)
):
    """Delete an entity with its attributes and relationships (admin)"""
    service.delete_entity(entity_id)
    return None
