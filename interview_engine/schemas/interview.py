"""
Pydantic schemas for interview endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field


class QuestionResponse(BaseModel):
    """A single interview question."""
    skill: str
    text: str
    difficulty: str
    category: str
    expected_answer: Optional[str] = None

    class Config:
        from_attributes = True


class InterviewCreate(BaseModel):
    """Schema for generating a new interview."""
    skills: List[str] = Field(..., min_length=1, description="Technical skills to generate questions for")
    questions_per_skill: int = Field(3, ge=1, le=10, description="Number of questions per skill")
    difficulty: str = Field(
        "intermediate",
        description="Difficulty level of the questions",
        pattern="^(beginner|intermediate|advanced)$"
    )
    context: Optional[str] = Field(None, description="Additional context or focus areas")

    class Config:
        json_schema_extra = {
            "example": {
                "skills": ["Python", "PostgreSQL"],
                "questions_per_skill": 3,
                "difficulty": "intermediate",
                "context": "Focus on performance trade-offs"
            }
        }


class InterviewResponse(BaseModel):
    id: str
    skills: List[str]
    difficulty: str
    questions_per_skill: int
    context: Optional[str] = None
    questions: List[QuestionResponse]
    total_questions: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InterviewListResponse(BaseModel):
    interviews: List[InterviewResponse]
    total: int
