"""
Interview creation and lookup.

Creating an interview calls the question generator once and freezes its
output as the interview's question catalog.
"""
import logging
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from interview_engine.core.errors import GenerationError, NotFoundError
from interview_engine.db.models.interview import Interview
from interview_engine.domain import Question
from interview_engine.llm.question_generator import QuestionGenerator

logger = logging.getLogger(__name__)

DIFFICULTIES = ("beginner", "intermediate", "advanced")
MIN_QUESTIONS_PER_SKILL = 1
MAX_QUESTIONS_PER_SKILL = 10


def filter_complete_questions(questions: Sequence[Question]) -> List[Question]:
    """Drop questions missing a required field, logging how many were dropped."""
    complete = [q for q in questions if q.is_complete()]
    dropped = len(questions) - len(complete)
    if dropped:
        logger.warning(f"Found {dropped} invalid questions, filtering them out")
    return complete


class InterviewService:
    def __init__(self, db: Session, generator: Optional[QuestionGenerator] = None):
        self.db = db
        self.generator = generator

    def create_interview(
        self,
        owner_id: str,
        skills: Sequence[str],
        questions_per_skill: int = 3,
        difficulty: str = "intermediate",
        context: Optional[str] = None,
    ) -> Interview:
        skills = [s.strip() for s in skills if s and s.strip()]
        if not skills:
            raise ValueError("At least one skill is required")
        if not MIN_QUESTIONS_PER_SKILL <= questions_per_skill <= MAX_QUESTIONS_PER_SKILL:
            raise ValueError(
                f"questions_per_skill must be between {MIN_QUESTIONS_PER_SKILL} and {MAX_QUESTIONS_PER_SKILL}"
            )
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
        if self.generator is None:
            raise GenerationError("Question generation is not configured")

        try:
            generated = self.generator.generate(skills, questions_per_skill, difficulty, context)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Question generator raised unexpectedly: {type(e).__name__}: {e}", exc_info=True)
            raise GenerationError(f"Interview generation failed: {e}") from e

        questions = filter_complete_questions(generated)
        if not questions:
            raise GenerationError("Question generator returned no usable questions")

        interview = Interview(
            owner_id=owner_id,
            skills=list(skills),
            difficulty=difficulty,
            questions_per_skill=questions_per_skill,
            context=context or None,
            questions=[q.to_dict() for q in questions],
            total_questions=len(questions),
        )
        self.db.add(interview)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(interview)

        logger.info(f"Interview saved: interview_id={interview.id}, total_questions={interview.total_questions}")
        return interview

    def list_interviews(self, owner_id: str) -> List[Interview]:
        return (
            self.db.query(Interview)
            .filter(Interview.owner_id == owner_id)
            .order_by(Interview.created_at.desc())
            .all()
        )

    def get_interview(self, interview_id: str, owner_id: str) -> Interview:
        interview = (
            self.db.query(Interview)
            .filter(Interview.id == interview_id, Interview.owner_id == owner_id)
            .first()
        )
        if interview is None:
            raise NotFoundError("Interview not found")
        return interview
