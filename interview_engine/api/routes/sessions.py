"""
Interview session endpoints.

Start a session, walk through its questions, submit answers and complete it.
Engine errors are turned into structured responses by the app-level handler.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from interview_engine.core.auth_dependency import get_answer_grader, get_current_owner, get_db
from interview_engine.db.models.interview_session import InterviewSession, SessionStatus
from interview_engine.domain import Question
from interview_engine.llm.answer_grader import AnswerGrader
from interview_engine.schemas.interview import QuestionResponse
from interview_engine.schemas.session import (
    AnswerResponse,
    AnswerSubmit,
    CompletionResponse,
    CurrentQuestionResponse,
    EvaluationResponse,
    PerformanceMetricsResponse,
    SessionListResponse,
    SessionResponse,
    SessionStart,
    SessionStartResponse,
)
from interview_engine.services.session_engine import SessionEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["Sessions"])


def session_to_response(session: InterviewSession) -> SessionResponse:
    status_value = session.status.value if isinstance(session.status, SessionStatus) else str(session.status)
    return SessionResponse(
        id=session.id,
        interview_id=session.interview_id,
        current_question_index=session.current_question_index,
        status=status_value,
        started_at=session.started_at,
        completed_at=session.completed_at,
        overall_score=session.overall_score,
        summary=session.summary,
        recommendations=session.recommendations,
        skill_breakdown=session.skill_breakdown,
        category_breakdown=session.category_breakdown,
        performance_metrics=session.performance_metrics,
    )


def question_to_response(question: Optional[Question]) -> Optional[QuestionResponse]:
    if question is None:
        return None
    return QuestionResponse(**question.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SessionStartResponse)
def start_session(
    payload: SessionStart,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    """Open a session on one of the caller's interviews and return the first question."""
    result = SessionEngine(db).start(owner_id, payload.interview_id)
    return SessionStartResponse(
        session=session_to_response(result.session),
        question=question_to_response(result.question),
    )


@router.get("", status_code=status.HTTP_200_OK, response_model=SessionListResponse)
def list_sessions(
    status_filter: Optional[SessionStatus] = Query(None, alias="status", description="Filter by status"),
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    sessions = SessionEngine(db).list_sessions(owner_id, status_filter)
    return SessionListResponse(
        sessions=[session_to_response(s) for s in sessions],
        total=len(sessions),
    )


@router.get("/{session_id}", status_code=status.HTTP_200_OK, response_model=SessionResponse)
def get_session(
    session_id: str,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    return session_to_response(SessionEngine(db).get_session(session_id, owner_id))


@router.get("/{session_id}/question", status_code=status.HTTP_200_OK, response_model=CurrentQuestionResponse)
def get_current_question(
    session_id: str,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    engine = SessionEngine(db)
    question = engine.current_question(session_id, owner_id)
    session = engine.get_session(session_id, owner_id)
    return CurrentQuestionResponse(
        current_question_index=session.current_question_index,
        question=question_to_response(question),
        done=question is None,
    )


@router.post("/{session_id}/answers", status_code=status.HTTP_200_OK, response_model=AnswerResponse)
def submit_answer(
    session_id: str,
    payload: AnswerSubmit,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    """
    Record the answer for a question.

    Submitting again for the same question replaces the transcription.
    Does not move the cursor; call /advance for that.
    """
    answer = SessionEngine(db).submit_answer(
        session_id, owner_id, payload.question_index, payload.transcription
    )
    return AnswerResponse.model_validate(answer)


@router.get("/{session_id}/answers", status_code=status.HTTP_200_OK, response_model=list[AnswerResponse])
def list_answers(
    session_id: str,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    answers = SessionEngine(db).list_answers(session_id, owner_id)
    return [AnswerResponse.model_validate(a) for a in answers]


@router.post("/{session_id}/advance", status_code=status.HTTP_200_OK, response_model=CurrentQuestionResponse)
def advance_session(
    session_id: str,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    """Move to the next question. `done` is true once the question set is exhausted."""
    engine = SessionEngine(db)
    question = engine.advance(session_id, owner_id)
    session = engine.get_session(session_id, owner_id)
    return CurrentQuestionResponse(
        current_question_index=session.current_question_index,
        question=question_to_response(question),
        done=question is None,
    )


@router.post("/{session_id}/complete", status_code=status.HTTP_200_OK, response_model=CompletionResponse)
def complete_session(
    session_id: str,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
    grader: AnswerGrader = Depends(get_answer_grader),
):
    """
    Grade all answers and finalize the session.

    Safe to call again: a completed session returns its stored results
    without grading a second time.
    """
    result = SessionEngine(db, grader).complete(session_id, owner_id)
    report = result.report
    return CompletionResponse(
        session=session_to_response(result.session),
        evaluations=[
            EvaluationResponse(
                question_index=e.question_index,
                score=e.score,
                feedback=e.feedback,
                strengths=e.strengths,
                weaknesses=e.weaknesses,
            )
            for e in result.evaluations
        ],
        overall_score=report.overall_score,
        summary=result.summary,
        recommendations=result.recommendations,
        interview_strengths=result.interview_strengths,
        interview_weaknesses=result.interview_weaknesses,
        skill_breakdown=report.skill_breakdown_dicts(),
        category_breakdown=report.category_breakdown_dicts(),
        performance_metrics=PerformanceMetricsResponse(**report.performance_metrics.to_dict()),
        replayed=result.replayed,
    )
