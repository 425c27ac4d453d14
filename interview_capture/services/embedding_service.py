"""
Chunk embedding generation.

Runs after the export response has been sent. Failures never reach the
client: run_embedding_job records them on the artifact and in the log.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from interview_capture.core import config
from interview_capture.db import session as db_session
from interview_capture.db.models.knowledge import KnowledgeArtifact, KnowledgeChunk, Embedding
from interview_capture.llm.provider import EmbeddingProvider
from interview_capture.llm.openai_provider import OpenAIEmbeddingProvider

logger = logging.getLogger(__name__)

EMBEDDING_PENDING = "pending"
EMBEDDING_COMPLETED = "completed"
EMBEDDING_FAILED = "failed"


def get_embedding_provider() -> EmbeddingProvider:
    return OpenAIEmbeddingProvider()


def generate_embedding_for_chunk(
    db: Session,
    chunk: KnowledgeChunk,
    provider: EmbeddingProvider,
    model: Optional[str] = None,
) -> Embedding:
    """Embed one chunk and upsert its vector (one row per chunk, latest wins)."""
    result = provider.embed(chunk.content, model=model or config.EMBEDDING_MODEL)

    embedding = db.query(Embedding).filter(Embedding.chunk_id == chunk.id).first()
    if embedding:
        embedding.vector = result.vector
        embedding.model = result.model
    else:
        embedding = Embedding(chunk_id=chunk.id, vector=result.vector, model=result.model)
        db.add(embedding)

    db.commit()
    return embedding


def generate_embeddings_for_artifact(
    db: Session,
    artifact_id: int,
    provider: Optional[EmbeddingProvider] = None,
) -> int:
    """
    Embed every chunk of an artifact in index order.

    The first failing chunk aborts the rest of the batch; chunks embedded
    before it keep their vectors.

    Returns:
        Number of chunks embedded
    """
    provider = provider or get_embedding_provider()
    chunks = (
        db.query(KnowledgeChunk)
        .filter(KnowledgeChunk.artifact_id == artifact_id)
        .order_by(KnowledgeChunk.chunk_index)
        .all()
    )

    for chunk in chunks:
        generate_embedding_for_chunk(db, chunk, provider)

    return len(chunks)


def _record_status(db: Session, artifact_id: int, status: str, **extra) -> None:
    artifact = db.query(KnowledgeArtifact).filter(KnowledgeArtifact.id == artifact_id).first()
    if not artifact:
        return
    metadata = dict(artifact.extra_metadata or {})
    # Outcome keys from an earlier run must not survive this one
    metadata.pop("embedding_error", None)
    metadata.pop("embedded_chunks", None)
    metadata["embedding_status"] = status
    metadata.update(extra)
    artifact.extra_metadata = metadata
    db.commit()


def run_embedding_job(artifact_id: int) -> None:
    """
    Background entry point for an artifact's embeddings.

    Owns its DB session since the request's session is closed by the time
    it runs. Never raises and never retries; the outcome lands in the
    artifact's metadata (embedding_status / embedding_error) and the log.
    A process exit while it runs simply loses the job.
    """
    db = db_session.SessionLocal()
    try:
        logger.info(f"Embedding job start: artifact_id={artifact_id}")
        count = generate_embeddings_for_artifact(db, artifact_id)
        _record_status(db, artifact_id, EMBEDDING_COMPLETED, embedded_chunks=count)
        logger.info(f"Embedding job done: artifact_id={artifact_id}, chunks={count}")
    except Exception as e:
        db.rollback()
        logger.error(f"Embedding job failed: artifact_id={artifact_id}: {e}", exc_info=True)
        try:
            _record_status(db, artifact_id, EMBEDDING_FAILED, embedding_error=str(e))
        except Exception:
            db.rollback()
            logger.exception(f"Could not record embedding failure: artifact_id={artifact_id}")
    finally:
        db.close()
