"""
Pydantic schemas for knowledge artifacts and chunks.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field


class ChunkResponse(BaseModel):
    id: int
    chunk_index: int
    content: str
    token_count: int
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias=AliasChoices("extra_metadata", "metadata"))
    has_embedding: bool = False

    class Config:
        from_attributes = True


class ArtifactSummary(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    type: str
    role_id: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias=AliasChoices("extra_metadata", "metadata"))
    chunk_count: int = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ArtifactDetail(ArtifactSummary):
    content: Optional[str] = None
    chunks: List[ChunkResponse] = Field(default_factory=list)
