import logging

from interview_engine.db.base import Base

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create all tables that do not exist yet."""
    from interview_engine.db import models  # noqa: F401  registers tables
    from interview_engine.db.session import engine

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Database tables ensured")
