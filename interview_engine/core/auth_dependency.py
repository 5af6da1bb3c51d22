from typing import Optional
from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer

from interview_engine.core.security import decode_owner_id
from interview_engine.db.session import SessionLocal
from interview_engine.llm.answer_grader import AnswerGrader
from interview_engine.llm.question_generator import QuestionGenerator

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_owner(token: str = Depends(oauth2_scheme)) -> str:
    """Get the caller's owner id from the JWT `sub` claim."""
    owner_id = decode_owner_id(token)
    if owner_id is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return owner_id


def get_question_generator(request: Request) -> Optional[QuestionGenerator]:
    """Generator built once at startup and kept on app.state (None if unconfigured)."""
    return getattr(request.app.state, "question_generator", None)


def get_answer_grader(request: Request) -> Optional[AnswerGrader]:
    """Grader built once at startup and kept on app.state (None if unconfigured)."""
    return getattr(request.app.state, "answer_grader", None)
