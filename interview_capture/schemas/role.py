"""
Pydantic schemas for role endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class RoleCreate(BaseModel):
    title: str = Field(..., description="Role title, unique within the company", min_length=1, max_length=255)
    description: Optional[str] = Field(None, description="Role description")


class RoleResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    company_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
