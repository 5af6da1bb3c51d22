"""
Plain value types shared by the session engine, the collaborators and the
persistence layer.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Question:
    """One generated interview question. Immutable once generated."""
    skill: str
    text: str
    difficulty: str
    category: str
    expected_answer: Optional[str] = None

    REQUIRED_FIELDS = ("skill", "text", "difficulty", "category")

    def is_complete(self) -> bool:
        return all(
            isinstance(getattr(self, name), str) and getattr(self, name).strip()
            for name in self.REQUIRED_FIELDS
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        return cls(
            skill=data.get("skill") or "",
            text=data.get("text") or "",
            difficulty=data.get("difficulty") or "",
            category=data.get("category") or "",
            expected_answer=data.get("expected_answer"),
        )


@dataclass(frozen=True)
class Unscored:
    """An answer that has not been through batch grading yet."""


@dataclass(frozen=True)
class Scored:
    score: float
    feedback: str = ""
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "feedback": self.feedback,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scored":
        return cls(
            score=float(data.get("score", 0.0)),
            feedback=data.get("feedback") or "",
            strengths=list(data.get("strengths") or []),
            weaknesses=list(data.get("weaknesses") or []),
        )


AnswerGrade = Union[Unscored, Scored]


@dataclass
class Breakdown:
    """Average score for every question sharing one attribute value."""
    key: str
    average_score: float
    question_count: int


@dataclass
class PerformanceMetrics:
    min: float = 0.0
    max: float = 0.0
    median: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max, "median": self.median}


@dataclass
class ScoringReport:
    overall_score: float
    skill_breakdown: List[Breakdown]
    category_breakdown: List[Breakdown]
    performance_metrics: PerformanceMetrics

    def skill_breakdown_dicts(self) -> List[Dict[str, Any]]:
        return [
            {"skill": b.key, "average_score": b.average_score, "question_count": b.question_count}
            for b in self.skill_breakdown
        ]

    def category_breakdown_dicts(self) -> List[Dict[str, Any]]:
        return [
            {"category": b.key, "average_score": b.average_score, "question_count": b.question_count}
            for b in self.category_breakdown
        ]
