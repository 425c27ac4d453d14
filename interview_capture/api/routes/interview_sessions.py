"""
Interview session endpoints.

Sessions are company-scoped through their role. Loading a single session
also returns the resume working view: the process's current questions in
traversal order, each with the saved response it resolves to.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from interview_capture.core.errors import internal_error, not_found
from interview_capture.core.scoping import CompanyScope, get_company_scope
from interview_capture.db.models.interview_session import InterviewSession
from interview_capture.schemas.interview import (
    SessionCreate,
    SessionUpdate,
    SessionResponse,
    SessionDetail,
    QuestionView,
    InterviewResponseOut,
)
from interview_capture.schemas.process import ProcessQuestion
from interview_capture.services.interview_service import (
    start_session,
    find_resumable_session,
    apply_session_update,
    build_question_view,
    SessionTransitionError,
    SessionPermissionError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interview-sessions", tags=["Interview Sessions"])


def _session_detail(session: InterviewSession) -> SessionDetail:
    questions = session.process.questions if session.process else []
    view = build_question_view(questions, session.responses)
    base = SessionResponse.model_validate(session)
    return SessionDetail(
        **base.model_dump(),
        questions=[
            QuestionView(
                question=ProcessQuestion(**question),
                response=InterviewResponseOut.model_validate(response) if response else None,
            )
            for question, response in view
        ],
    )


@router.get("", response_model=List[SessionResponse])
def list_sessions(
    role_id: Optional[int] = Query(None, description="Filter by role"),
    process_id: Optional[int] = Query(None, description="Filter by process"),
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(IN_PROGRESS|COMPLETED|CANCELLED)$"),
    scope: CompanyScope = Depends(get_company_scope),
):
    """Sessions of the caller's company, newest first."""
    try:
        query = scope.sessions()
        if role_id is not None:
            query = query.filter(InterviewSession.role_id == role_id)
        if process_id is not None:
            query = query.filter(InterviewSession.process_id == process_id)
        if status_filter:
            query = query.filter(InterviewSession.status == status_filter)

        sessions = query.order_by(InterviewSession.created_at.desc(), InterviewSession.id.desc()).all()
        return [SessionResponse.model_validate(session) for session in sessions]
    except Exception as e:
        logger.error(f"Failed to list interview sessions: {e}", exc_info=True)
        raise internal_error("Failed to fetch interview sessions", e)


@router.get("/resumable", response_model=SessionDetail)
def get_resumable_session(
    role_id: int = Query(..., description="Role of the session to resume"),
    process_id: int = Query(..., description="Process of the session to resume"),
    scope: CompanyScope = Depends(get_company_scope),
):
    """
    Latest IN_PROGRESS session for a (role, process) pair, if any.

    Advisory only: POST still creates a new session whether or not one exists.
    """
    try:
        session = find_resumable_session(scope, role_id, process_id)
        if not session:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No in-progress session for this role and process"
            )
        return _session_detail(session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to find resumable session: {e}", exc_info=True)
        raise internal_error("Failed to fetch interview session", e)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SessionResponse)
def create_session(payload: SessionCreate, scope: CompanyScope = Depends(get_company_scope)):
    db = scope.db
    try:
        role = scope.get_role(payload.role_id)
        if not role:
            raise not_found("Role")

        process = scope.get_process(payload.process_id)
        if not process:
            raise not_found("Process")

        session = start_session(db, role, process)
        return SessionResponse.model_validate(session)

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create interview session: {e}", exc_info=True)
        raise internal_error("Failed to create interview session", e)


@router.get("/{session_id}", response_model=SessionDetail)
def get_session(session_id: int, scope: CompanyScope = Depends(get_company_scope)):
    try:
        session = scope.get_session(session_id)
        if not session:
            raise not_found("Session")
        return _session_detail(session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to get interview session: {e}", exc_info=True)
        raise internal_error("Failed to fetch interview session", e)


@router.put("/{session_id}", response_model=SessionResponse)
def update_session(
    session_id: int,
    payload: SessionUpdate,
    scope: CompanyScope = Depends(get_company_scope),
):
    """
    Partial status/completed_at update.

    COMPLETED without completed_at leaves completed_at unset. Cancelling
    needs an ADMIN token; COMPLETED and CANCELLED sessions are final.
    """
    db = scope.db
    try:
        session = scope.get_session(session_id)
        if not session:
            raise not_found("Session")

        session = apply_session_update(
            db,
            session,
            scope.user,
            status=payload.status,
            completed_at=payload.completed_at,
        )
        return SessionResponse.model_validate(session)

    except HTTPException:
        db.rollback()
        raise
    except SessionPermissionError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except SessionTransitionError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update interview session: {e}", exc_info=True)
        raise internal_error("Failed to update interview session", e)
