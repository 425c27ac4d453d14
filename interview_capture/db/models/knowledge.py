"""
Knowledge models: exported documents, their retrieval chunks and chunk embeddings.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Index, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from interview_capture.db.base import Base

ARTIFACT_TYPES = (
    "MARKDOWN", "PDF", "DOC", "DOCX", "TXT", "CSV", "XLSX",
    "HTML", "IMAGE", "AUDIO", "VIDEO", "OTHER",
)


class KnowledgeArtifact(Base):
    """
    A stored document eligible for chunking and embedding.

    Interview exports upsert on (title, role_id): the title already encodes
    process, role and interview date.
    """
    __tablename__ = "knowledge_artifacts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    type = Column(String, nullable=False, default="MARKDOWN")
    file_url = Column(String, nullable=True)
    content = Column(Text, nullable=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=True, index=True)
    # "metadata" is reserved on declarative classes
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    role = relationship("Role", backref="knowledge_artifacts")
    chunks = relationship(
        "KnowledgeChunk",
        back_populates="artifact",
        order_by="KnowledgeChunk.chunk_index",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_artifact_role_title", "role_id", "title"),
    )

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    def __repr__(self):
        return f"<KnowledgeArtifact(id={self.id}, title='{self.title}', type='{self.type}')>"


class KnowledgeChunk(Base):
    __tablename__ = "knowledge_chunks"

    id = Column(Integer, primary_key=True, index=True)
    artifact_id = Column(Integer, ForeignKey("knowledge_artifacts.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    chunk_index = Column(Integer, nullable=False)
    token_count = Column(Integer, nullable=False, default=0)
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    artifact = relationship("KnowledgeArtifact", back_populates="chunks")
    embedding = relationship(
        "Embedding",
        back_populates="chunk",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("artifact_id", "chunk_index", name="uq_chunk_artifact_index"),
    )

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None

    def __repr__(self):
        return f"<KnowledgeChunk(id={self.id}, artifact_id={self.artifact_id}, index={self.chunk_index})>"


class Embedding(Base):
    """Latest vector for a chunk; regenerated vectors overwrite in place."""
    __tablename__ = "embeddings"

    id = Column(Integer, primary_key=True, index=True)
    chunk_id = Column(Integer, ForeignKey("knowledge_chunks.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    vector = Column(JSON, nullable=False)
    model = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    chunk = relationship("KnowledgeChunk", back_populates="embedding")

    def __repr__(self):
        return f"<Embedding(id={self.id}, chunk_id={self.chunk_id}, model='{self.model}')>"
