from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class DataModelCreate(BaseModel):
    name: str
    description: Optional[str] = None
    version: Optional[str] = "1.0"


class DataModelUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None


class DataModelResponse(BaseModel):
    id: str
    project_id: str
    name: str
    description: Optional[str] = None
    version: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DataModelExport(BaseModel):
    """Self-contained JSON document of a data model"""
    format_version: str = "1.0"
    exported_at: datetime
    data_model: DataModelResponse
    entities: List[dict]  # entity rows, each with an "attributes" list
    relationships: List[dict] = []
    referentials: List[dict] = []
