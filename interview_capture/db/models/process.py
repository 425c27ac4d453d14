from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from interview_capture.db.base import Base


class Process(Base):
    """
    An ordered template of interview questions.

    Questions live inline as a JSON list of {id, text, required, order}; the
    whole list is replaced on update, there is no per-question table.
    """
    __tablename__ = "processes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    questions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    company = relationship("Company", backref="processes")

    def __repr__(self):
        return f"<Process(id={self.id}, title='{self.title}', company_id={self.company_id})>"
