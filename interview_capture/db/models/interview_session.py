from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from interview_capture.db.base import Base

IN_PROGRESS = "IN_PROGRESS"
COMPLETED = "COMPLETED"
CANCELLED = "CANCELLED"
SESSION_STATUSES = (IN_PROGRESS, COMPLETED, CANCELLED)
TERMINAL_STATUSES = (COMPLETED, CANCELLED)


class InterviewSession(Base):
    """One pass through a Process's questions for a Role. Company-scoped through its role."""
    __tablename__ = "interview_sessions"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    process_id = Column(Integer, ForeignKey("processes.id"), nullable=True, index=True)
    status = Column(String, nullable=False, default=IN_PROGRESS)
    started_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    role = relationship("Role", backref="interview_sessions")
    process = relationship("Process", backref="interview_sessions")
    # Storage order; the exporter renders in this order
    responses = relationship(
        "InterviewResponse",
        back_populates="session",
        order_by="InterviewResponse.id",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_session_role_process_status", "role_id", "process_id", "status"),
    )

    def __repr__(self):
        return f"<InterviewSession(id={self.id}, role_id={self.role_id}, status='{self.status}')>"
