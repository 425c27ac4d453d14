"""
Interview export: Markdown download plus knowledge ingestion.
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import Response

from interview_capture.core import config
from interview_capture.core.errors import internal_error, not_found
from interview_capture.core.scoping import CompanyScope, get_company_scope
from interview_capture.services.embedding_service import run_embedding_job
from interview_capture.services.knowledge_service import ingest_interview_markdown
from interview_capture.services.markdown_export import render_interview_markdown, export_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interview-export", tags=["Interview Export"])


@router.get("/{session_id}")
def export_session(
    session_id: int,
    background_tasks: BackgroundTasks,
    scope: CompanyScope = Depends(get_company_scope),
):
    """
    Download a session as Markdown.

    Side effects: the Markdown is stored as a knowledge artifact (overwriting
    an earlier export of the same process/role/date), re-chunked, and chunk
    embeddings are generated after the response is sent. Embedding failures
    never affect this response.
    """
    db = scope.db
    try:
        session = scope.get_session(session_id)
        if not session:
            raise not_found("Session")

        markdown = render_interview_markdown(
            session,
            include_screenshots=True,
            screenshot_base_url=config.PUBLIC_BASE_URL,
        )

        artifact = ingest_interview_markdown(db, session, markdown)
        background_tasks.add_task(run_embedding_job, artifact.id)

        logger.info(f"Interview exported: session_id={session.id}, artifact_id={artifact.id}")
        return Response(
            content=markdown,
            media_type="text/markdown",
            headers={"Content-Disposition": f'attachment; filename="{export_filename(artifact.title)}"'},
        )

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to export interview: {e}", exc_info=True)
        raise internal_error("Failed to export interview", e)
