"""
Pydantic schemas for process endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


class ProcessQuestion(BaseModel):
    """One question of a process. `order` drives traversal; it need not be contiguous."""
    id: Optional[str] = Field(None, description="Stable question ID (generated when omitted)")
    text: str = Field(..., min_length=1, description="Question text")
    required: bool = Field(False, description="Whether an answer is expected")
    order: Optional[int] = Field(None, description="Sort key; missing counts as 0")


class ProcessCreate(BaseModel):
    title: str = Field(..., description="Process title", min_length=1, max_length=255)
    description: Optional[str] = Field(None, description="Process description")
    questions: List[ProcessQuestion] = Field(default_factory=list, description="Ordered questions")


class ProcessUpdate(BaseModel):
    """Only provided fields change; `questions`, when sent, replaces the whole list."""
    title: Optional[str] = Field(None, description="Process title", min_length=1, max_length=255)
    description: Optional[str] = Field(None, description="Process description")
    questions: Optional[List[ProcessQuestion]] = Field(None, description="Replacement question list")


class ProcessResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    company_id: int
    questions: List[ProcessQuestion] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "title": "Month-end close",
                "description": "How the finance team closes the books",
                "company_id": 1,
                "questions": [
                    {"id": "q1", "text": "Which systems do you open first?", "required": True, "order": 1},
                    {"id": "q2", "text": "Who signs off the reconciliation?", "required": False, "order": 2}
                ],
                "created_at": "2026-01-15T10:30:00Z",
                "updated_at": "2026-01-15T10:30:00Z"
            }
        }
