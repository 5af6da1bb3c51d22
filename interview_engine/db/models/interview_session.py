"""
InterviewSession model: one candidate's pass through an interview's questions.
"""
import enum
import uuid
from sqlalchemy import Column, Integer, String, Text, DateTime, Float, ForeignKey, JSON, Enum, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from interview_engine.db.base import Base


class SessionStatus(str, enum.Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class InterviewSession(Base):
    __tablename__ = "interview_sessions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    interview_id = Column(String(36), ForeignKey("interviews.id"), nullable=False, index=True)
    owner_id = Column(String, nullable=False, index=True)

    current_question_index = Column(Integer, nullable=False, default=0)
    status = Column(
        Enum(SessionStatus, values_callable=lambda e: [m.value for m in e], name="session_status"),
        nullable=False,
        default=SessionStatus.NOT_STARTED,
        index=True,
    )
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Filled in when the session completes
    overall_score = Column(Float, nullable=True)
    reported_overall_score = Column(Float, nullable=True)  # as supplied by the grader, if any
    summary = Column(Text, nullable=True)
    recommendations = Column(JSON, nullable=True)
    interview_strengths = Column(JSON, nullable=True)
    interview_weaknesses = Column(JSON, nullable=True)
    skill_breakdown = Column(JSON, nullable=True)
    category_breakdown = Column(JSON, nullable=True)
    performance_metrics = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    interview = relationship("Interview")

    __table_args__ = (
        Index("idx_sessions_owner_created", "owner_id", "created_at"),
    )

    def __repr__(self):
        return (
            f"<InterviewSession(id={self.id}, status={self.status}, "
            f"current_question_index={self.current_question_index})>"
        )
