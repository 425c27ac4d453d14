"""
Knowledge artifact endpoints: browse exported interviews and their chunks.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status

from interview_capture.core.auth_dependency import CurrentUser, require_admin
from interview_capture.core.errors import internal_error, not_found
from interview_capture.core.scoping import CompanyScope, get_company_scope
from interview_capture.db.models.knowledge import KnowledgeArtifact
from interview_capture.schemas.knowledge import ArtifactSummary, ArtifactDetail
from interview_capture.services.embedding_service import run_embedding_job

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge-artifacts", tags=["Knowledge"])


@router.get("", response_model=List[ArtifactSummary])
def list_artifacts(
    role_id: Optional[int] = Query(None, description="Filter by role"),
    scope: CompanyScope = Depends(get_company_scope),
):
    try:
        query = scope.artifacts()
        if role_id is not None:
            query = query.filter(KnowledgeArtifact.role_id == role_id)
        artifacts = query.order_by(KnowledgeArtifact.updated_at.desc(), KnowledgeArtifact.id.desc()).all()
        return [ArtifactSummary.model_validate(artifact) for artifact in artifacts]
    except Exception as e:
        logger.error(f"Failed to list knowledge artifacts: {e}", exc_info=True)
        raise internal_error("Failed to fetch knowledge artifacts", e)


@router.get("/{artifact_id}", response_model=ArtifactDetail)
def get_artifact(artifact_id: int, scope: CompanyScope = Depends(get_company_scope)):
    try:
        artifact = scope.get_artifact(artifact_id)
        if not artifact:
            raise not_found("Knowledge artifact")
        return ArtifactDetail.model_validate(artifact)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to get knowledge artifact: {e}", exc_info=True)
        raise internal_error("Failed to fetch knowledge artifact", e)


@router.post("/{artifact_id}/embeddings", status_code=status.HTTP_202_ACCEPTED)
def regenerate_embeddings(
    artifact_id: int,
    background_tasks: BackgroundTasks,
    admin: CurrentUser = Depends(require_admin),
    scope: CompanyScope = Depends(get_company_scope),
):
    """
    Re-run embedding generation for an artifact (ADMIN only).

    Failed jobs are never retried on their own; this is the manual retry.
    """
    try:
        artifact = scope.get_artifact(artifact_id)
        if not artifact:
            raise not_found("Knowledge artifact")

        background_tasks.add_task(run_embedding_job, artifact.id)
        logger.info(f"Embedding job requested: artifact_id={artifact.id}, by user_id={admin.id}")
        return {"message": "Embedding generation scheduled", "artifact_id": artifact.id}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to schedule embeddings: {e}", exc_info=True)
        raise internal_error("Failed to schedule embedding generation", e)
