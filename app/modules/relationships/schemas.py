from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from enum import Enum


class RelationshipType(str, Enum):
    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"


class RelationshipCreate(BaseModel):
    source_entity_id: str
    target_entity_id: str
    relationship_type: RelationshipType = RelationshipType.ONE_TO_MANY
    name: Optional[str] = None
    source_attribute_id: Optional[str] = None
    target_attribute_id: Optional[str] = None
    source_cardinality: Optional[str] = None
    target_cardinality: Optional[str] = None


class RelationshipUpdate(BaseModel):
    source_entity_id: Optional[str] = None
    target_entity_id: Optional[str] = None
    relationship_type: Optional[RelationshipType] = None
    name: Optional[str] = None
    source_attribute_id: Optional[str] = None
    target_attribute_id: Optional[str] = None
    source_cardinality: Optional[str] = None
    target_cardinality: Optional[str] = None


class RelationshipResponse(BaseModel):
    id: str
    data_model_id: str
    source_entity_id: str
    target_entity_id: str
    relationship_type: str
    name: Optional[str] = None
    source_attribute_id: Optional[str] = None
    target_attribute_id: Optional[str] = None
    source_cardinality: Optional[str] = None
    target_cardinality: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
