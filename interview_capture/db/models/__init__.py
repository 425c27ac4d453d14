"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from interview_capture.db.models.company import Company
from interview_capture.db.models.user import User
from interview_capture.db.models.role import Role
from interview_capture.db.models.process import Process
from interview_capture.db.models.interview_session import InterviewSession
from interview_capture.db.models.interview_response import InterviewResponse
from interview_capture.db.models.knowledge import KnowledgeArtifact, KnowledgeChunk, Embedding

# Explicitly export all models for clarity
__all__ = [
    "Company",
    "User",
    "Role",
    "Process",
    "InterviewSession",
    "InterviewResponse",
    "KnowledgeArtifact",
    "KnowledgeChunk",
    "Embedding",
]
