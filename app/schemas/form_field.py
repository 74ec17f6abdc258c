"""
Field catalog Pydantic schemas
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

FieldType = Literal["text", "email", "tel", "number", "select", "textarea"]

class FieldDefinitionCreate(BaseModel):
    """Schema for adding a catalog field"""
    field_key: str = Field(min_length=1, max_length=100, pattern=r"^[a-z][a-z0-9_]*$")
    label: str = Field(min_length=1, max_length=255)
    field_type: FieldType = "text"
    field_options: Optional[List[str]] = None
    placeholder: Optional[str] = None
    description: Optional[str] = None
    sort_order: Optional[int] = None

class FieldDefinitionResponse(BaseModel):
    """Catalog field"""
    id: int
    field_key: str
    label: str
    field_type: str
    options: Optional[List[str]] = None
    placeholder: Optional[str] = None
    description: Optional[str] = None
    sort_order: int

    class Config:
        from_attributes = True
