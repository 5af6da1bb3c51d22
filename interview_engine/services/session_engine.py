"""
Interview session engine.

Owns the session lifecycle (NOT_STARTED -> IN_PROGRESS -> COMPLETED), the
question cursor, and the one-shot batch grading that completes a session.

Every operation that takes a session id resolves it against the caller's
owner id first, so a foreign session always looks missing.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from interview_engine.core.errors import GradingError, InterviewEngineError, InvalidStateError, NotFoundError
from interview_engine.db.models.answer import Answer
from interview_engine.db.models.interview import Interview
from interview_engine.db.models.interview_session import InterviewSession, SessionStatus
from interview_engine.domain import Question, Scored, ScoringReport
from interview_engine.llm.answer_grader import AnswerGrader
from interview_engine.schemas.grading import BatchEvaluation, GradingAnswer
from interview_engine.services.answer_ledger import AnswerLedger
from interview_engine.services.catalog import InterviewCatalog
from interview_engine.services.scoring import aggregate_scores, clamp_score

logger = logging.getLogger(__name__)


@dataclass
class StartResult:
    session: InterviewSession
    question: Question


@dataclass
class EvaluationEntry:
    question_index: int
    score: float
    feedback: str
    strengths: List[str]
    weaknesses: List[str]


@dataclass
class CompletionResult:
    session: InterviewSession
    evaluations: List[EvaluationEntry]
    report: ScoringReport
    summary: str = ""
    recommendations: List[str] = field(default_factory=list)
    interview_strengths: List[str] = field(default_factory=list)
    interview_weaknesses: List[str] = field(default_factory=list)
    replayed: bool = False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionEngine:
    def __init__(self, db: Session, grader: Optional[AnswerGrader] = None):
        self.db = db
        self.grader = grader
        self.ledger = AnswerLedger(db)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _resolve_session(self, session_id: str, owner_id: str) -> InterviewSession:
        session = self.db.query(InterviewSession).filter(InterviewSession.id == session_id).first()
        if session is None or session.owner_id != owner_id:
            raise NotFoundError("Interview session not found")
        return session

    def _load_catalog(self, session: InterviewSession) -> InterviewCatalog:
        interview = session.interview
        if interview is None:
            raise NotFoundError("Interview not found")
        return InterviewCatalog.from_interview(interview)

    def _commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, owner_id: str, interview_id: str) -> StartResult:
        """Open a new session on an interview and return its first question."""
        interview = (
            self.db.query(Interview)
            .filter(Interview.id == interview_id, Interview.owner_id == owner_id)
            .first()
        )
        if interview is None:
            raise NotFoundError("Interview not found")

        catalog = InterviewCatalog.from_interview(interview)
        if catalog.length() == 0:
            raise InvalidStateError("Interview has no questions")

        session = InterviewSession(
            interview_id=interview.id,
            owner_id=owner_id,
            current_question_index=0,
            status=SessionStatus.IN_PROGRESS,
            started_at=_utcnow(),
        )
        self.db.add(session)
        self._commit()
        self.db.refresh(session)

        logger.info(f"Interview session started: session_id={session.id}, owner_id={owner_id}")
        return StartResult(session=session, question=catalog.by_index(0))

    def current_question(self, session_id: str, owner_id: str) -> Optional[Question]:
        """Question under the cursor, or None once the cursor is past the end."""
        session = self._resolve_session(session_id, owner_id)
        catalog = self._load_catalog(session)
        if not catalog.contains_index(session.current_question_index):
            return None
        return catalog.by_index(session.current_question_index)

    def submit_answer(
        self,
        session_id: str,
        owner_id: str,
        question_index: int,
        transcription: str,
    ) -> Answer:
        """
        Record the transcription for a question.

        Re-submitting for the same index replaces the earlier transcription.
        The cursor is not moved.
        """
        session = self._resolve_session(session_id, owner_id)
        if session.status == SessionStatus.COMPLETED:
            raise InvalidStateError("Interview session is already completed")

        catalog = self._load_catalog(session)
        question = catalog.by_index(question_index)

        try:
            answer = self.ledger.upsert(session.id, question_index, question.text, transcription)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(answer)
        return answer

    def advance(self, session_id: str, owner_id: str) -> Optional[Question]:
        """
        Move the cursor forward by one.

        Returns the new current question, or None when the question set is
        exhausted. The cursor never moves past the number of questions.
        """
        session = self._resolve_session(session_id, owner_id)
        if session.status == SessionStatus.COMPLETED:
            raise InvalidStateError("Interview session is already completed")

        catalog = self._load_catalog(session)
        total = catalog.length()

        if session.current_question_index < total:
            session.current_question_index += 1
            self._commit()
            logger.info(
                f"Session advanced: session_id={session.id}, "
                f"current_question_index={session.current_question_index}/{total}"
            )

        if session.current_question_index >= total:
            return None
        return catalog.by_index(session.current_question_index)

    def complete(self, session_id: str, owner_id: str) -> CompletionResult:
        """
        Grade all answers once and finalize the session.

        Calling this on an already completed session replays the stored
        results without grading again. A grading failure leaves the session
        IN_PROGRESS with nothing written, so the call can be retried.
        """
        session = self._resolve_session(session_id, owner_id)
        catalog = self._load_catalog(session)

        if session.status == SessionStatus.COMPLETED:
            return self._replay(session, catalog)

        answers = self.ledger.list_by_session(session.id)
        if not answers:
            raise InvalidStateError("No answers found to evaluate")

        batch = self._grade(catalog, answers)

        try:
            self._apply_evaluations(session, answers, batch)
            session.status = SessionStatus.COMPLETED
            session.completed_at = _utcnow()

            report = self._aggregate(catalog, answers, batch.overall_score)
            session.overall_score = report.overall_score
            session.reported_overall_score = batch.overall_score
            session.summary = batch.summary
            session.recommendations = list(batch.recommendations)
            session.interview_strengths = list(batch.interview_strengths)
            session.interview_weaknesses = list(batch.interview_weaknesses)
            session.skill_breakdown = report.skill_breakdown_dicts()
            session.category_breakdown = report.category_breakdown_dicts()
            session.performance_metrics = report.performance_metrics.to_dict()

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Interview session completed: session_id={session.id}, "
            f"overall_score={report.overall_score:.2f}"
        )
        return CompletionResult(
            session=session,
            evaluations=self._evaluation_entries(answers),
            report=report,
            summary=batch.summary,
            recommendations=list(batch.recommendations),
            interview_strengths=list(batch.interview_strengths),
            interview_weaknesses=list(batch.interview_weaknesses),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_session(self, session_id: str, owner_id: str) -> InterviewSession:
        return self._resolve_session(session_id, owner_id)

    def list_answers(self, session_id: str, owner_id: str) -> List[Answer]:
        session = self._resolve_session(session_id, owner_id)
        return self.ledger.list_by_session(session.id)

    def list_sessions(self, owner_id: str, status: Optional[SessionStatus] = None) -> List[InterviewSession]:
        query = self.db.query(InterviewSession).filter(InterviewSession.owner_id == owner_id)
        if status is not None:
            query = query.filter(InterviewSession.status == status)
        return query.order_by(InterviewSession.created_at.desc()).all()

    # ------------------------------------------------------------------
    # Completion internals
    # ------------------------------------------------------------------

    def _grade(self, catalog: InterviewCatalog, answers: List[Answer]) -> BatchEvaluation:
        if self.grader is None:
            raise GradingError("Answer grading is not configured")

        grading_answers = [
            GradingAnswer(
                question_index=a.question_index,
                question_text=a.question_text,
                transcription=a.transcription,
            )
            for a in answers
        ]
        try:
            return self.grader.grade(catalog.questions(), grading_answers)
        except InterviewEngineError:
            raise
        except Exception as e:
            logger.error(f"Grader raised unexpectedly: {type(e).__name__}: {e}", exc_info=True)
            raise GradingError(f"Evaluation failed: {e}") from e

    def _apply_evaluations(self, session: InterviewSession, answers: List[Answer], batch: BatchEvaluation):
        by_index = {a.question_index: a for a in answers}
        graded = set()

        for evaluation in batch.evaluations:
            answer = by_index.get(evaluation.question_index)
            if answer is None:
                logger.warning(
                    f"Dropping evaluation with no matching answer: session_id={session.id}, "
                    f"question_index={evaluation.question_index}"
                )
                continue
            if evaluation.question_index in graded:
                logger.warning(
                    f"Ignoring duplicate evaluation: session_id={session.id}, "
                    f"question_index={evaluation.question_index}"
                )
                continue
            answer.grade = Scored(
                score=clamp_score(evaluation.score),
                feedback=evaluation.feedback,
                strengths=list(evaluation.strengths),
                weaknesses=list(evaluation.weaknesses),
            )
            graded.add(evaluation.question_index)

        missing = set(by_index) - graded
        if missing:
            logger.warning(f"Grader skipped answers: session_id={session.id}, question_indexes={sorted(missing)}")

    def _aggregate(
        self,
        catalog: InterviewCatalog,
        answers: List[Answer],
        explicit_overall: Optional[float],
    ) -> ScoringReport:
        scored: List[Tuple[Question, float]] = []
        for answer in answers:
            grade = answer.grade
            if not isinstance(grade, Scored):
                continue
            if not catalog.contains_index(answer.question_index):
                logger.warning(f"Answer references unknown question index {answer.question_index}")
                continue
            scored.append((catalog.by_index(answer.question_index), grade.score))
        return aggregate_scores(scored, explicit_overall)

    def _evaluation_entries(self, answers: List[Answer]) -> List[EvaluationEntry]:
        entries = []
        for answer in answers:
            grade = answer.grade
            if isinstance(grade, Scored):
                entries.append(EvaluationEntry(
                    question_index=answer.question_index,
                    score=clamp_score(grade.score),
                    feedback=grade.feedback,
                    strengths=list(grade.strengths),
                    weaknesses=list(grade.weaknesses),
                ))
        return entries

    def _replay(self, session: InterviewSession, catalog: InterviewCatalog) -> CompletionResult:
        answers = self.ledger.list_by_session(session.id)
        report = self._aggregate(catalog, answers, session.reported_overall_score)
        logger.info(f"Replaying completed session: session_id={session.id}")
        return CompletionResult(
            session=session,
            evaluations=self._evaluation_entries(answers),
            report=report,
            summary=session.summary or "",
            recommendations=list(session.recommendations or []),
            interview_strengths=list(session.interview_strengths or []),
            interview_weaknesses=list(session.interview_weaknesses or []),
            replayed=True,
        )
