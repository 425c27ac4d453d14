from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from interview_capture.db.base import Base


class InterviewResponse(Base):
    __tablename__ = "interview_responses"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("interview_sessions.id", ondelete="CASCADE"), nullable=False, index=True)

    # question_id is recorded when the client knows it; rows without one are
    # matched back to the process by exact question text
    question_id = Column(String, nullable=True, index=True)
    question = Column(Text, nullable=False)

    response = Column(Text, nullable=True)
    transcript = Column(Text, nullable=True)
    audio_url = Column(String, nullable=True)
    screenshot_urls = Column(JSON, nullable=True)  # ordered list of "/uploads/screenshots/..." refs

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    session = relationship("InterviewSession", back_populates="responses")

    def __repr__(self):
        return f"<InterviewResponse(id={self.id}, session_id={self.session_id})>"
