"""
Pydantic schemas for interview sessions and responses.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from interview_capture.schemas.role import RoleResponse
from interview_capture.schemas.process import ProcessQuestion, ProcessResponse


class SessionCreate(BaseModel):
    role_id: int = Field(..., description="Role being interviewed for")
    process_id: int = Field(..., description="Process whose questions drive the session")


class SessionUpdate(BaseModel):
    """Partial update. COMPLETED does not imply completed_at; send both."""
    status: Optional[str] = Field(None, pattern="^(IN_PROGRESS|COMPLETED|CANCELLED)$")
    completed_at: Optional[datetime] = Field(None, description="Completion timestamp")


class InterviewResponseOut(BaseModel):
    id: int
    session_id: int
    question_id: Optional[str] = None
    question: str
    response: Optional[str] = None
    transcript: Optional[str] = None
    audio_url: Optional[str] = None
    screenshot_urls: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SessionResponse(BaseModel):
    id: int
    role_id: int
    process_id: Optional[int] = None
    status: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    role: RoleResponse
    process: Optional[ProcessResponse] = None
    responses: List[InterviewResponseOut] = Field(default_factory=list)

    class Config:
        from_attributes = True


class QuestionView(BaseModel):
    """A process question paired with the saved response it resolved to, if any."""
    question: ProcessQuestion
    response: Optional[InterviewResponseOut] = None


class SessionDetail(SessionResponse):
    """Session as loaded for resume: current process questions in traversal order."""
    questions: List[QuestionView] = Field(default_factory=list)
