from pydantic import BaseModel
from typing import Optional
from datetime import datetime

DEFAULT_COLOR = "#6366F1"


class ReferentialCreate(BaseModel):
    name: str
    description: Optional[str] = None
    color: Optional[str] = DEFAULT_COLOR


class ReferentialUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class ReferentialResponse(BaseModel):
    id: str
    data_model_id: str
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
