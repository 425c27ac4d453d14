import logging

from interview_capture.db.session import engine
from interview_capture.db.base import Base

logger = logging.getLogger(__name__)


def init_db():
    """Create any missing tables (development and tests; production uses Alembic)."""
    # Registers every model with Base.metadata
    import interview_capture.db.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
