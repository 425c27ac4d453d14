"""
Interview response endpoints (multipart, for screenshot uploads).

POST stores the first answer to a question; PUT amends it by id.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from interview_capture.core.errors import internal_error, not_found
from interview_capture.core.scoping import CompanyScope, get_company_scope
from interview_capture.schemas.interview import InterviewResponseOut
from interview_capture.services.attachment_storage import save_screenshots
from interview_capture.services.response_service import create_response, amend_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interview-responses", tags=["Interview Responses"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InterviewResponseOut)
async def submit_response(
    session_id: Optional[int] = Form(None),
    question: Optional[str] = Form(None),
    question_id: Optional[str] = Form(None),
    response: Optional[str] = Form(None),
    transcript: Optional[str] = Form(None),
    audio_url: Optional[str] = Form(None),
    screenshots: List[UploadFile] = File(default=[]),
    scope: CompanyScope = Depends(get_company_scope),
):
    db = scope.db
    try:
        if not session_id or not question:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Session ID and question are required"
            )

        session = scope.get_session(session_id)
        if not session:
            raise not_found("Session")

        screenshot_urls = await save_screenshots(screenshots)

        record = create_response(
            db,
            session,
            question=question,
            question_id=question_id,
            response=response,
            transcript=transcript,
            audio_url=audio_url,
            screenshot_urls=screenshot_urls,
        )
        return InterviewResponseOut.model_validate(record)

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create interview response: {e}", exc_info=True)
        raise internal_error("Failed to create interview response", e)


@router.put("", response_model=InterviewResponseOut)
async def update_response(
    id: Optional[int] = Form(None),
    response: Optional[str] = Form(None),
    transcript: Optional[str] = Form(None),
    audio_url: Optional[str] = Form(None),
    screenshots: List[UploadFile] = File(default=[]),
    scope: CompanyScope = Depends(get_company_scope),
):
    """
    Amend a saved response.

    Uploaded screenshots are appended to the existing ones; this endpoint
    cannot remove screenshots.
    """
    db = scope.db
    try:
        if not id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Response ID is required"
            )

        record = scope.get_response(id)
        if not record:
            raise not_found("Response")

        new_urls = await save_screenshots(screenshots)

        record = amend_response(
            db,
            record,
            response=response,
            transcript=transcript,
            audio_url=audio_url,
            new_screenshot_urls=new_urls,
        )
        return InterviewResponseOut.model_validate(record)

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update interview response: {e}", exc_info=True)
        raise internal_error("Failed to update interview response", e)
