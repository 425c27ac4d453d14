"""
Interview session lifecycle and the resume working view.
"""
import logging
import uuid
from datetime import datetime
from typing import Optional, List, Dict, Any, Tuple, Iterable

from sqlalchemy.orm import Session

from interview_capture.core.auth_dependency import CurrentUser
from interview_capture.core.scoping import CompanyScope
from interview_capture.db.models.role import Role
from interview_capture.db.models.process import Process
from interview_capture.db.models.interview_session import (
    InterviewSession,
    IN_PROGRESS,
    COMPLETED,
    CANCELLED,
    TERMINAL_STATUSES,
)
from interview_capture.db.models.interview_response import InterviewResponse

logger = logging.getLogger(__name__)


class SessionTransitionError(ValueError):
    """Requested status change is not part of the session lifecycle."""


class SessionPermissionError(PermissionError):
    """Requested status change needs an ADMIN identity."""


def normalize_questions(questions: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Give every question a stable id before it is stored."""
    normalized = []
    for question in questions:
        item = dict(question)
        if not item.get("id"):
            item["id"] = uuid.uuid4().hex
        normalized.append(item)
    return normalized


def sort_questions(questions: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Ascending by `order` (missing counts as 0); ties keep their list position."""
    return sorted(questions or [], key=lambda q: q.get("order") or 0)


def build_question_view(
    questions: Optional[List[Dict[str, Any]]],
    responses: Iterable[InterviewResponse],
) -> List[Tuple[Dict[str, Any], Optional[InterviewResponse]]]:
    """
    Pair the current process questions with previously saved responses.

    A response carrying a question_id is matched by id only. Older responses
    without one fall back to exact question-text equality (first question
    with that text). When several responses land on the same question the
    latest one wins. Responses that match nothing are left out of the view;
    they stay in storage.
    """
    ordered = sort_questions(questions)

    by_id = {}
    by_text = {}
    for position, question in enumerate(ordered):
        if question.get("id"):
            by_id.setdefault(question["id"], position)
        by_text.setdefault(question.get("text"), position)

    matched: Dict[int, InterviewResponse] = {}
    for response in responses:
        if response.question_id:
            position = by_id.get(response.question_id)
        else:
            position = by_text.get(response.question)
        if position is not None:
            matched[position] = response

    return [(question, matched.get(position)) for position, question in enumerate(ordered)]


def start_session(db: Session, role: Role, process: Process) -> InterviewSession:
    """
    Create a new IN_PROGRESS session.

    No dedup: callers that want to resume should look up
    find_resumable_session first.
    """
    session = InterviewSession(
        role_id=role.id,
        process_id=process.id,
        status=IN_PROGRESS,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info(f"Interview session started: session_id={session.id}, role_id={role.id}, process_id={process.id}")
    return session


def find_resumable_session(scope: CompanyScope, role_id: int, process_id: int) -> Optional[InterviewSession]:
    """Most recent IN_PROGRESS session for the pair within the caller's company."""
    return (
        scope.sessions()
        .filter(
            InterviewSession.role_id == role_id,
            InterviewSession.process_id == process_id,
            InterviewSession.status == IN_PROGRESS,
        )
        .order_by(InterviewSession.created_at.desc(), InterviewSession.id.desc())
        .first()
    )


def check_transition(current: str, requested: str, user: CurrentUser) -> None:
    """
    Validate a status change.

    Raises:
        SessionTransitionError: Leaving a terminal state or an unknown target
        SessionPermissionError: Cancelling without ADMIN role
    """
    if requested == current:
        return
    if current in TERMINAL_STATUSES:
        raise SessionTransitionError(f"Session is {current} and can no longer change status")
    if requested == CANCELLED and not user.is_admin:
        raise SessionPermissionError("Only admins can cancel a session")
    if requested not in (COMPLETED, CANCELLED):
        raise SessionTransitionError(f"Cannot move session from {current} to {requested}")


def apply_session_update(
    db: Session,
    session: InterviewSession,
    user: CurrentUser,
    status: Optional[str] = None,
    completed_at: Optional[datetime] = None,
) -> InterviewSession:
    """
    Partial update of status and/or completed_at.

    Setting COMPLETED does not stamp completed_at; the caller sends both.
    """
    if status:
        check_transition(session.status, status, user)
        session.status = status
    if completed_at:
        session.completed_at = completed_at

    db.commit()
    db.refresh(session)
    logger.info(f"Interview session updated: session_id={session.id}, status={session.status}")
    return session
