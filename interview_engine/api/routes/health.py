"""
Health check endpoint for deployment monitoring.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Request
from sqlalchemy import text

from interview_engine import __version__
from interview_engine.db.session import SessionLocal

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check(request: Request):
    """
    Returns 200 with "healthy" when the database is reachable, "degraded" otherwise.
    """
    status = "healthy"
    
    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {str(e)}"
        status = "degraded"
    
    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": db_status,
        "grader_configured": getattr(request.app.state, "answer_grader", None) is not None,
        "generator_configured": getattr(request.app.state, "question_generator", None) is not None,
        "version": __version__,
    }
