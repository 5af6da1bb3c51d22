"""
Interview endpoints.

Generates question sets and lists the caller's interviews.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from interview_engine.core.auth_dependency import get_current_owner, get_db, get_question_generator
from interview_engine.llm.question_generator import QuestionGenerator
from interview_engine.schemas.interview import (
    InterviewCreate,
    InterviewResponse,
    InterviewListResponse,
)
from interview_engine.services.interview_service import InterviewService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interviews", tags=["Interviews"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InterviewResponse)
def create_interview(
    payload: InterviewCreate,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
    generator: QuestionGenerator = Depends(get_question_generator),
):
    """
    Generate a new interview for the authenticated user.
    
    Calls the question generator once; the resulting question set is fixed
    for the lifetime of the interview.
    """
    service = InterviewService(db, generator)
    try:
        interview = service.create_interview(
            owner_id=owner_id,
            skills=payload.skills,
            questions_per_skill=payload.questions_per_skill,
            difficulty=payload.difficulty,
            context=payload.context,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    
    return InterviewResponse.model_validate(interview)


@router.get("", status_code=status.HTTP_200_OK, response_model=InterviewListResponse)
def list_interviews(
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    """List the caller's interviews, newest first."""
    interviews = InterviewService(db).list_interviews(owner_id)
    return InterviewListResponse(
        interviews=[InterviewResponse.model_validate(i) for i in interviews],
        total=len(interviews),
    )


@router.get("/{interview_id}", status_code=status.HTTP_200_OK, response_model=InterviewResponse)
def get_interview(
    interview_id: str,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    interview = InterviewService(db).get_interview(interview_id, owner_id)
    return InterviewResponse.model_validate(interview)
