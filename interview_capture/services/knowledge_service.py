"""
Knowledge ingestion for exported interviews.

Stores the rendered Markdown as a knowledge artifact and rebuilds its chunk
set. Embedding is scheduled separately (embedding_service.run_embedding_job).
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from interview_capture.core import config
from interview_capture.db.models.interview_session import InterviewSession
from interview_capture.db.models.knowledge import KnowledgeArtifact, KnowledgeChunk
from interview_capture.services.chunking import chunk_text, count_tokens
from interview_capture.services.embedding_service import EMBEDDING_PENDING
from interview_capture.services.markdown_export import build_artifact_title

logger = logging.getLogger(__name__)

MARKDOWN = "MARKDOWN"


def ingest_interview_markdown(
    db: Session,
    session: InterviewSession,
    markdown: str,
    chunk_size: Optional[int] = None,
    overlap: Optional[int] = None,
) -> KnowledgeArtifact:
    """
    Create or overwrite the artifact for this export and replace its chunks.

    Re-exporting the same process/role/date collapses onto one artifact: its
    old chunks are deleted before the new ones are written, so the chunk
    count always matches the current content.
    """
    chunk_size = chunk_size or config.CHUNK_SIZE
    overlap = config.CHUNK_OVERLAP if overlap is None else overlap

    title = build_artifact_title(session)
    metadata = {
        "session_id": session.id,
        "process_id": session.process_id,
        "export_date": datetime.now(timezone.utc).isoformat(),
        "embedding_status": EMBEDDING_PENDING,
    }

    artifact = (
        db.query(KnowledgeArtifact)
        .filter(
            KnowledgeArtifact.title == title,
            KnowledgeArtifact.role_id == session.role_id,
        )
        .first()
    )

    if artifact:
        artifact.content = markdown
        artifact.type = MARKDOWN
        artifact.extra_metadata = metadata
        removed = len(artifact.chunks)
        artifact.chunks.clear()
        # Deletes must reach the DB before re-inserting the same chunk indexes
        db.flush()
        logger.info(f"Knowledge artifact overwritten: artifact_id={artifact.id}, old_chunks={removed}")
    else:
        process_title = session.process.title if session.process else None
        artifact = KnowledgeArtifact(
            title=title,
            description=f"Exported interview for {process_title or 'process'}",
            type=MARKDOWN,
            content=markdown,
            role_id=session.role_id,
            extra_metadata=metadata,
        )
        db.add(artifact)
        db.flush()
        logger.info(f"Knowledge artifact created: artifact_id={artifact.id}")

    # Indexes are fixed here, before anything is written
    for index, content in enumerate(chunk_text(markdown, chunk_size, overlap)):
        artifact.chunks.append(KnowledgeChunk(
            content=content,
            chunk_index=index,
            token_count=count_tokens(content),
            extra_metadata={
                "artifact_title": artifact.title,
                "artifact_type": artifact.type,
                "session_id": session.id,
            },
        ))

    db.commit()
    db.refresh(artifact)
    logger.info(f"Knowledge chunks written: artifact_id={artifact.id}, chunks={len(artifact.chunks)}")
    return artifact
