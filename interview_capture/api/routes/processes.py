"""
Process endpoints: company-scoped CRUD over question templates.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from interview_capture.core.errors import internal_error, not_found
from interview_capture.core.scoping import CompanyScope, get_company_scope
from interview_capture.db.models.process import Process
from interview_capture.db.models.interview_session import InterviewSession
from interview_capture.schemas.process import ProcessCreate, ProcessUpdate, ProcessResponse
from interview_capture.services.interview_service import normalize_questions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/processes", tags=["Processes"])


@router.get("", response_model=List[ProcessResponse])
def list_processes(scope: CompanyScope = Depends(get_company_scope)):
    try:
        processes = scope.processes().order_by(Process.created_at.desc(), Process.id.desc()).all()
        return [ProcessResponse.model_validate(process) for process in processes]
    except Exception as e:
        logger.error(f"Failed to list processes: {e}", exc_info=True)
        raise internal_error("Failed to fetch processes", e)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProcessResponse)
def create_process(payload: ProcessCreate, scope: CompanyScope = Depends(get_company_scope)):
    db = scope.db
    try:
        if not scope.company_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User must belong to a company"
            )

        process = Process(
            title=payload.title,
            description=payload.description or None,
            company_id=scope.company_id,
            questions=normalize_questions(q.model_dump() for q in payload.questions),
        )
        db.add(process)
        db.commit()
        db.refresh(process)

        logger.info(f"Process created: process_id={process.id}, questions={len(process.questions)}")
        return ProcessResponse.model_validate(process)

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create process: {e}", exc_info=True)
        raise internal_error("Failed to create process", e)


@router.get("/{process_id}", response_model=ProcessResponse)
def get_process(process_id: int, scope: CompanyScope = Depends(get_company_scope)):
    try:
        process = scope.get_process(process_id)
        if not process:
            raise not_found("Process")
        return ProcessResponse.model_validate(process)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to get process: {e}", exc_info=True)
        raise internal_error("Failed to fetch process", e)


@router.put("/{process_id}", response_model=ProcessResponse)
def update_process(
    process_id: int,
    payload: ProcessUpdate,
    scope: CompanyScope = Depends(get_company_scope),
):
    """
    Update only the provided fields.

    `questions`, when sent, replaces the stored list wholesale; there is no
    per-question merge. An explicit null is rejected; send [] to clear.
    """
    db = scope.db
    try:
        process = scope.get_process(process_id)
        if not process:
            raise not_found("Process")

        update_data = payload.model_dump(exclude_unset=True)
        if "title" in update_data and not update_data["title"]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Title cannot be empty"
            )
        if "questions" in update_data:
            if update_data["questions"] is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Questions cannot be null"
                )
            update_data["questions"] = normalize_questions(update_data["questions"])
        for field, value in update_data.items():
            setattr(process, field, value)

        db.commit()
        db.refresh(process)

        logger.info(f"Process updated: process_id={process.id}, fields={sorted(update_data)}")
        return ProcessResponse.model_validate(process)

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update process: {e}", exc_info=True)
        raise internal_error("Failed to update process", e)


@router.delete("/{process_id}")
def delete_process(process_id: int, scope: CompanyScope = Depends(get_company_scope)):
    """
    Delete a process that no interview session uses.

    Sessions keep pointing at their process for resume and export, so
    deletion is refused (409) while any exist.
    """
    db = scope.db
    try:
        process = scope.get_process(process_id)
        if not process:
            raise not_found("Process")

        in_use = db.query(InterviewSession).filter(InterviewSession.process_id == process.id).count()
        if in_use:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Process is used by {in_use} interview session(s) and cannot be deleted"
            )

        db.delete(process)
        db.commit()

        logger.info(f"Process deleted: process_id={process_id}")
        return {"message": "Process deleted successfully"}

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete process: {e}", exc_info=True)
        raise internal_error("Failed to delete process", e)
