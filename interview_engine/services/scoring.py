"""
Scoring aggregation for a completed interview session.

Pure functions only: per-question scores plus question metadata in,
overall score, skill/category breakdowns and min/max/median out.
"""
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from interview_engine.domain import Breakdown, PerformanceMetrics, Question, ScoringReport

MIN_SCORE = 0.0
MAX_SCORE = 10.0


def clamp_score(raw_score: float) -> float:
    """Clamp a raw grader score into [0, 10]."""
    return max(MIN_SCORE, min(MAX_SCORE, float(raw_score)))


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def median(values: Sequence[float]) -> float:
    """Median of the values; 0 for an empty list."""
    if not values:
        return 0.0
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def compute_breakdown(
    scored: Sequence[Tuple[Question, float]],
    key: Callable[[Question], str],
) -> List[Breakdown]:
    """
    Group scores by a question attribute.

    Groups come out in first-seen order, not sorted.
    """
    groups: Dict[str, List[float]] = {}
    for question, score in scored:
        groups.setdefault(key(question), []).append(score)

    return [
        Breakdown(key=name, average_score=mean(scores), question_count=len(scores))
        for name, scores in groups.items()
    ]


def compute_performance_metrics(scores: Sequence[float]) -> PerformanceMetrics:
    if not scores:
        return PerformanceMetrics()
    return PerformanceMetrics(min=min(scores), max=max(scores), median=median(scores))


def aggregate_scores(
    scored: Sequence[Tuple[Question, float]],
    explicit_overall: Optional[float] = None,
) -> ScoringReport:
    """
    Build the full scoring report.

    Args:
        scored: (question, raw score) pairs for every graded answer
        explicit_overall: overall score reported by the grader, used as-is
            (after clamping) when present

    Returns:
        ScoringReport; every field is zero/empty when nothing was scored
    """
    clamped = [(question, clamp_score(score)) for question, score in scored]
    scores = [score for _, score in clamped]

    if not scores:
        overall = 0.0
    elif explicit_overall is not None:
        overall = clamp_score(explicit_overall)
    else:
        overall = mean(scores)

    return ScoringReport(
        overall_score=overall,
        skill_breakdown=compute_breakdown(clamped, lambda q: q.skill),
        category_breakdown=compute_breakdown(clamped, lambda q: q.category),
        performance_metrics=compute_performance_metrics(scores),
    )
