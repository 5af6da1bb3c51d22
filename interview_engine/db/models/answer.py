"""
Answer model: one transcription per (session, question index).
"""
import uuid
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.sql import func
from interview_engine.db.base import Base
from interview_engine.domain import AnswerGrade, Scored, Unscored


class Answer(Base):
    __tablename__ = "answers"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    session_id = Column(String(36), ForeignKey("interview_sessions.id"), nullable=False, index=True)
    question_index = Column(Integer, nullable=False)
    question_text = Column(Text, nullable=False)
    transcription = Column(Text, nullable=False)

    # Raw storage for the grade; read it through `grade`
    evaluation = Column(JSON, nullable=True)

    answered_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("session_id", "question_index", name="uq_answers_session_question"),
    )

    @property
    def grade(self) -> AnswerGrade:
        if not self.evaluation:
            return Unscored()
        return Scored.from_dict(self.evaluation)

    @grade.setter
    def grade(self, value: AnswerGrade):
        self.evaluation = value.to_dict() if isinstance(value, Scored) else None

    def __repr__(self):
        return f"<Answer(session_id={self.session_id}, question_index={self.question_index})>"
