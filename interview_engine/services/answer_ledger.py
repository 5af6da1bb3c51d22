"""
Answer ledger: the set of submitted answers for one session.

Enforces one answer per (session, question index). Re-submission updates the
existing row in place. Grades are never written here.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from interview_engine.db.models.answer import Answer

logger = logging.getLogger(__name__)


class AnswerLedger:
    def __init__(self, db: Session):
        self.db = db

    def find(self, session_id: str, question_index: int) -> Optional[Answer]:
        return (
            self.db.query(Answer)
            .filter(Answer.session_id == session_id, Answer.question_index == question_index)
            .first()
        )

    def upsert(
        self,
        session_id: str,
        question_index: int,
        question_text: str,
        transcription: str,
    ) -> Answer:
        """
        Insert or update the answer for a question index.

        The caller owns the transaction; this only flushes.
        """
        now = datetime.now(timezone.utc)
        answer = self.find(session_id, question_index)

        if answer is not None:
            answer.transcription = transcription
            answer.answered_at = now
            logger.info(f"Answer updated: session_id={session_id}, question_index={question_index}")
        else:
            answer = Answer(
                session_id=session_id,
                question_index=question_index,
                question_text=question_text,
                transcription=transcription,
                evaluation=None,
                answered_at=now,
            )
            self.db.add(answer)
            logger.info(f"Answer submitted: session_id={session_id}, question_index={question_index}")

        self.db.flush()
        return answer

    def list_by_session(self, session_id: str) -> List[Answer]:
        """All answers for a session, ordered by question index."""
        return (
            self.db.query(Answer)
            .filter(Answer.session_id == session_id)
            .order_by(Answer.question_index.asc())
            .all()
        )

    def count(self, session_id: str) -> int:
        return self.db.query(Answer).filter(Answer.session_id == session_id).count()
