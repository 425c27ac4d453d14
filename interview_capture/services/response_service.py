"""
Response persistence: one row per question per session, amended in place.
"""
import logging
from typing import Optional, List

from sqlalchemy.orm import Session

from interview_capture.db.models.interview_session import InterviewSession
from interview_capture.db.models.interview_response import InterviewResponse

logger = logging.getLogger(__name__)


def create_response(
    db: Session,
    session: InterviewSession,
    question: str,
    question_id: Optional[str] = None,
    response: Optional[str] = None,
    transcript: Optional[str] = None,
    audio_url: Optional[str] = None,
    screenshot_urls: Optional[List[str]] = None,
) -> InterviewResponse:
    """Store the first answer to a question. Blank values are stored as NULL."""
    record = InterviewResponse(
        session_id=session.id,
        question_id=question_id or None,
        question=question,
        response=response or None,
        transcript=transcript or None,
        audio_url=audio_url or None,
        screenshot_urls=screenshot_urls or None,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"Interview response created: response_id={record.id}, session_id={session.id}")
    return record


def amend_response(
    db: Session,
    record: InterviewResponse,
    response: Optional[str] = None,
    transcript: Optional[str] = None,
    audio_url: Optional[str] = None,
    new_screenshot_urls: Optional[List[str]] = None,
) -> InterviewResponse:
    """
    Update an existing answer.

    Fields left as None are untouched. New screenshots are appended; the
    stored list is only rewritten when the combined list is non-empty, so
    there is no way to clear screenshots here. Concurrent amends are
    last-write-wins.
    """
    if response is not None:
        record.response = response
    if transcript is not None:
        record.transcript = transcript
    if audio_url is not None:
        record.audio_url = audio_url

    existing = record.screenshot_urls if isinstance(record.screenshot_urls, list) else []
    combined = existing + list(new_screenshot_urls or [])
    if combined and combined != existing:
        # New list object so the JSON column registers the change
        record.screenshot_urls = combined

    db.commit()
    db.refresh(record)
    logger.info(f"Interview response amended: response_id={record.id}, screenshots={len(combined)}")
    return record
