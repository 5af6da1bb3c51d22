"""
Interview model: a generated, immutable question set owned by one user.
"""
import uuid
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, Index
from sqlalchemy.sql import func
from interview_engine.db.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Interview(Base):
    """
    Stores the question set produced by the question generator.

    `questions` holds a list of {skill, text, difficulty, category, expected_answer}
    dicts and is never rewritten after insert.
    """
    __tablename__ = "interviews"

    id = Column(String(36), primary_key=True, default=_new_id)
    owner_id = Column(String, nullable=False, index=True)

    skills = Column(JSON, nullable=False)
    difficulty = Column(String, nullable=False)
    questions_per_skill = Column(Integer, nullable=False, default=3)
    context = Column(Text, nullable=True)

    questions = Column(JSON, nullable=False)
    total_questions = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __table_args__ = (
        Index("idx_interviews_owner_created", "owner_id", "created_at"),
    )

    def __repr__(self):
        return f"<Interview(id={self.id}, owner_id={self.owner_id}, total_questions={self.total_questions})>"
