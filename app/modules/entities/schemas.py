from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class EntityCreate(BaseModel):
    name: str
    description: Optional[str] = None
    position_x: float = 0
    position_y: float = 0
    referential_id: Optional[str] = None


class EntityUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    position_x: Optional[float] = None
    position_y: Optional[float] = None
    referential_id: Optional[str] = None


class EntityResponse(BaseModel):
    id: str
    data_model_id: str
    name: str
    description: Optional[str] = None
    position_x: Optional[float] = 0
    position_y: Optional[float] = 0
    referential_id: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
