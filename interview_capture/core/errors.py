"""
Error helpers shared by route handlers.
"""
from fastapi import HTTPException, status

from interview_capture.core import config


def internal_error(message: str, error: Exception) -> HTTPException:
    """
    Build the 500 a handler raises after catching an unexpected exception.

    Outside production the raw error text is appended to help local debugging.
    """
    detail = message
    if not config.is_production():
        detail = f"{message}: {error}"
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )


def not_found(entity: str) -> HTTPException:
    """Same answer for missing and other-company entities."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{entity} not found or access denied",
    )
