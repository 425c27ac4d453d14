from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from interview_capture.db.base import Base


class Role(Base):
    """A job role or category that interviews and knowledge artifacts hang off."""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    company = relationship("Company", backref="roles")

    __table_args__ = (
        UniqueConstraint("company_id", "title", name="uq_roles_company_title"),
    )

    def __repr__(self):
        return f"<Role(id={self.id}, title='{self.title}', company_id={self.company_id})>"
