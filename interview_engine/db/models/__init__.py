"""
Database models module.

Imports every model so they register with Base.metadata before table creation.
"""
from interview_engine.db.models.interview import Interview
from interview_engine.db.models.interview_session import InterviewSession, SessionStatus
from interview_engine.db.models.answer import Answer

__all__ = [
    "Interview",
    "InterviewSession",
    "SessionStatus",
    "Answer",
]
