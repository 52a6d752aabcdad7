from fastapi import APIRouter, Depends
from app.core.access import ResourceKind
from app.core.dependencies import AccessGrant, require_access
from app.database.supabase_client import get_service_supabase
from app.modules.data_models.schemas import (
    DataModelCreate, DataModelUpdate, DataModelResponse, DataModelExport
)
from app.modules.data_models.service import DataModelService
from supabase import Client
from typing import List

router = APIRouter(tags=["data_models"])

project_access = require_access(ResourceKind.PROJECT, "project_id")
model_access = require_access(ResourceKind.DATA_MODEL, "model_id")


def get_data_model_service(supabase: Client = Depends(get_service_supabase)) -> DataModelService:
    return DataModelService(supabase)


@router.get("/projects/{project_id}/models", response_model=List[DataModelResponse])
async def list_data_models(
    project_id: str,
    grant: AccessGrant = Depends(project_access),
    service: DataModelService = Depends(get_data_model_service)
):
    """List data models of a project"""
    return service.list_data_models(project_id)


@router.post("/projects/{project_id}/models", response_model=DataModelResponse, status_code=201)
async def create_data_model(
    project_id: str,
    model_data: DataModelCreate,
    grant: AccessGrant = Depends(project_access),
    service: DataModelService = Depends(get_data_model_service)
):
    """Create a data model in a project (editor or admin)"""
    return service.create_data_model(project_id, model_data, grant.user.id)


@router.get("/models/{model_id}", response_model=DataModelResponse)
async def get_data_model(
    model_id: str,
    grant: AccessGrant = Depends(model_access),
    service: DataModelService = Depends(get_data_model_service)
):
    return service.get_data_model_by_id(model_id)


@router.patch("/models/{model_id}", response_model=DataModelResponse)
async def update_data_model(
    model_id: str,
    model_data: DataModelUpdate,
    grant: AccessGrant = Depends(model_access),
    service: DataModelService = Depends(get_data_model_service)
):
    return service.update_data_model(model_id, model_data)


@router.delete("/models/{model_id}", status_code=204)
async def delete_data_model(
    model_id: str,
    grant: AccessGrant = Depends(model_access),
    service: DataModelService = Depends(get_data_model_service)
):
    """Delete a data model and everything in it (admin)"""
    service.delete_data_model(model_id)
    return None


@router.get("/models/{model_id}/export", response_model=DataModelExport)
async def export_data_model(
    model_id: str,
    grant: AccessGrant = Depends(model_access),
    service: DataModelService = Depends(get_data_model_service)
):
    """Export the data model and everything in it as JSON"""
    return service.export_data_model(model_id)
