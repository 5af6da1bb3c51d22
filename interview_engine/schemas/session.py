"""
Pydantic schemas for interview session endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from interview_engine.schemas.interview import QuestionResponse


class SessionStart(BaseModel):
    interview_id: str = Field(..., description="Interview to run")


class AnswerSubmit(BaseModel):
    question_index: int = Field(..., description="Index of the question being answered")
    transcription: str = Field(..., description="Transcription of the candidate answer")


class EvaluationResponse(BaseModel):
    question_index: int
    score: float = Field(..., ge=0, le=10)
    feedback: str
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)


class AnswerResponse(BaseModel):
    id: str
    session_id: str
    question_index: int
    question_text: str
    transcription: str
    evaluation: Optional[dict] = None
    answered_at: datetime

    class Config:
        from_attributes = True


class SkillBreakdownEntry(BaseModel):
    skill: str
    average_score: float
    question_count: int


class CategoryBreakdownEntry(BaseModel):
    category: str
    average_score: float
    question_count: int


class PerformanceMetricsResponse(BaseModel):
    min: float
    max: float
    median: float


class SessionResponse(BaseModel):
    id: str
    interview_id: str
    current_question_index: int
    status: str
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    overall_score: Optional[float] = None
    summary: Optional[str] = None
    recommendations: Optional[List[str]] = None
    skill_breakdown: Optional[List[SkillBreakdownEntry]] = None
    category_breakdown: Optional[List[CategoryBreakdownEntry]] = None
    performance_metrics: Optional[PerformanceMetricsResponse] = None

    class Config:
        from_attributes = True


class SessionListResponse(BaseModel):
    sessions: List[SessionResponse]
    total: int


class SessionStartResponse(BaseModel):
    session: SessionResponse
    question: QuestionResponse


class CurrentQuestionResponse(BaseModel):
    """`question` is null once the cursor has passed the last question."""
    current_question_index: int
    question: Optional[QuestionResponse] = None
    done: bool


class CompletionResponse(BaseModel):
    session: SessionResponse
    evaluations: List[EvaluationResponse]
    overall_score: float
    summary: str
    recommendations: List[str]
    interview_strengths: List[str] = Field(default_factory=list)
    interview_weaknesses: List[str] = Field(default_factory=list)
    skill_breakdown: List[SkillBreakdownEntry]
    category_breakdown: List[CategoryBreakdownEntry]
    performance_metrics: PerformanceMetricsResponse
    replayed: bool = False
