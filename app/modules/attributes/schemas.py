from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AttributeCreate(BaseModel):
    name: str
    data_type: str
    description: Optional[str] = None
    is_primary_key: bool = False
    is_foreign_key: bool = False
    is_unique: bool = False
    is_mandatory: bool = False
    is_calculated: bool = False
    calculation_rule: Optional[str] = None


class AttributeUpdate(BaseModel):
    name: Optional[str] = None
    data_type: Optional[str] = None
    description: Optional[str] = None
    is_primary_key: Optional[bool] = None
    is_foreign_key: Optional[bool] = None
    is_unique: Optional[bool] = None
    is_mandatory: Optional[bool] = None
    is_calculated: Optional[bool] = None
    calculation_rule: Optional[str] = None


class AttributeResponse(BaseModel):
    id: str
    entity_id: str
    name: str
    data_type: str
    description: Optional[str] = None
    is_primary_key: bool = False
    is_foreign_key: bool = False
    is_unique: bool = False
    is_mandatory: bool = False
    is_calculated: bool = False
    calculation_rule: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
