from fastapi import APIRouter, Depends
from app.core.access import ResourceKind
from app.core.dependencies import AccessGrant, require_access
from app.database.supabase_client import get_service_supabase
from app.modules.relationships.schemas import (
    RelationshipCreate, RelationshipUpdate, RelationshipResponse
)
from app.modules.relationships.service import RelationshipService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/models/{model_id}/relationships", tags=["relationships"])

model_access = require_access(ResourceKind.DATA_MODEL, "model_id")


def get_relationship_service(supabase: Client = Depends(get_service_supabase)) -> RelationshipService:
    return RelationshipService(supabase)


@router.get("", response_model=List[RelationshipResponse])
async def list_relationships(
    model_id: str,
    entity_id: Optional[str] = None,
    grant: AccessGrant = Depends(model_access),
    service: RelationshipService = Depends(get_relationship_service)
):
    """List relationships of a data model, or only those of one entity"""
    return service.list_relationships(model_id, entity_id)


@router.post("", response_model=RelationshipResponse, status_code=201)
async def create_relationship(
    model_id: str,
    relationship_data: RelationshipCreate,
    grant: AccessGrant = Depends(model_access),
    service: RelationshipService = Depends(get_relationship_service)
):
    return service.create_relationship(model_id, relationship_data)


@router.get("/{relationship_id}", response_model=RelationshipResponse)
async def get_relationship(
    model_id: str,
    relationship_id: str,
    grant: AccessGrant = Depends(model_access),
    service: RelationshipService = Depends(get_relationship_service)
):
    return service.get_relationship(model_id, relationship_id)


@router.patch("/{relationship_id}", response_model=RelationshipResponse)
async def update_relationship(
    model_id: str,
    relationship_id: str,
    relationship_data: RelationshipUpdate,
    grant: AccessGrant = Depends(model_access),
    service: RelationshipService = Depends(get_relationship_service)
):
    return service.update_relationship(model_id, relationship_id, relationship_data)


@router.delete("/{relationship_id}", status_code=204)
async def delete_relationship(
    model_id: str,
    relationship_id: str,
    grant: AccessGrant = Depends(model_access),
    service: RelationshipService = Depends(get_relationship_service)
):
    service.delete_relationship(model_id, relationship_id)
    return None
