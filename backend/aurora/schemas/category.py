"""
Event category schemas.
"""
from typing import Optional
from pydantic import BaseModel, Field
from uuid import UUID


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    color: str = Field(default="#2b7fff", pattern=r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
    icon: Optional[str] = Field(default=None, max_length=50)
    sort_order: int = 0


class CategoryResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    color: str
    icon: Optional[str] = None
    is_system_default: bool = False
    sort_order: int = 0

    class Config:
        from_attributes = True
