"""
Pydantic models for the answer grader's input and output.

Field aliases accept the camelCase keys the grading model is prompted to emit.
"""
import math
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from interview_engine.services.scoring import clamp_score


class GradingAnswer(BaseModel):
    """One submitted answer as handed to the grader."""
    question_index: int = Field(..., ge=0)
    question_text: str
    transcription: str


class QuestionEvaluation(BaseModel):
    question_index: int = Field(..., alias="questionIndex")
    score: float = Field(..., description="Score 0-10, clamped on input")
    feedback: str = ""
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    @field_validator("score", mode="before")
    @classmethod
    def clamp(cls, value):
        if value is None or isinstance(value, bool):
            raise ValueError("score must be a number")
        value = float(value)
        if not math.isfinite(value):
            raise ValueError("score must be finite")
        return clamp_score(value)


class BatchEvaluation(BaseModel):
    """Grader output for a whole session."""
    evaluations: List[QuestionEvaluation]
    overall_score: Optional[float] = Field(None, alias="overallScore")
    summary: str = ""
    recommendations: List[str] = Field(default_factory=list)
    interview_strengths: List[str] = Field(default_factory=list, alias="interviewStrengths")
    interview_weaknesses: List[str] = Field(default_factory=list, alias="interviewWeaknesses")

    class Config:
        populate_by_name = True

    @field_validator("overall_score", mode="before")
    @classmethod
    def clamp_overall(cls, value):
        if value is None:
            return None
        value = float(value)
        if not math.isfinite(value):
            raise ValueError("overall score must be finite")
        return clamp_score(value)

    @field_validator("recommendations", "interview_strengths", "interview_weaknesses", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return value or []
