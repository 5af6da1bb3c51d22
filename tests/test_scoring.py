"""
Unit tests for score aggregation.
Tests clamping, overall score, breakdowns and min/max/median.
"""
import pytest

from interview_engine.domain import Question
from interview_engine.services.scoring import (
    aggregate_scores,
    clamp_score,
    compute_breakdown,
    compute_performance_metrics,
    median,
)


def q(skill: str, category: str = "conceptual", text: str = "Explain it") -> Question:
    return Question(skill=skill, text=text, difficulty="intermediate", category=category)


def test_clamp_score_bounds():
    """Test raw scores outside [0, 10] are clamped."""
    assert clamp_score(12.0) == 10.0
    assert clamp_score(-3) == 0.0
    assert clamp_score(7.5) == 7.5


@pytest.mark.parametrize("scores,expected", [
    ([6, 8, 10], 8),
    ([6, 8], 7),
    ([], 0),
    ([10, 2, 6, 4], 5),
])
def test_median(scores, expected):
    """Test median for odd, even and empty lists."""
    assert median(scores) == expected


def test_skill_breakdown_groups_in_first_seen_order():
    """Test skills are grouped and kept in first-occurrence order."""
    scored = [(q("Go", text="q1"), 8), (q("Go", text="q2"), 6), (q("SQL", text="q3"), 9)]
    
    breakdown = compute_breakdown(scored, lambda question: question.skill)
    
    assert [(b.key, b.average_score, b.question_count) for b in breakdown] == [
        ("Go", 7, 2),
        ("SQL", 9, 1),
    ]


def test_breakdown_is_not_sorted_alphabetically():
    """Test a later alphabetical skill seen first stays first."""
    scored = [(q("Rust"), 5), (q("Go"), 7), (q("Rust"), 9)]
    
    breakdown = compute_breakdown(scored, lambda question: question.skill)
    
    assert [b.key for b in breakdown] == ["Rust", "Go"]
    assert breakdown[0].average_score == 7


def test_performance_metrics_empty():
    """Test an empty score list reports zeros instead of failing."""
    metrics = compute_performance_metrics([])
    assert (metrics.min, metrics.max, metrics.median) == (0, 0, 0)


def test_aggregate_scores_clamps_before_aggregating():
    """Test out-of-range scores are clamped before the mean and metrics."""
    report = aggregate_scores([(q("Go"), 12.0), (q("Go"), -3)])
    
    assert report.overall_score == 5.0
    assert report.performance_metrics.min == 0.0
    assert report.performance_metrics.max == 10.0
    assert report.skill_breakdown[0].average_score == 5.0


def test_aggregate_scores_uses_explicit_overall():
    """Test a grader-supplied overall score is used instead of the mean."""
    report = aggregate_scores([(q("Go"), 8), (q("SQL"), 6)], explicit_overall=8.2)
    assert report.overall_score == pytest.approx(8.2)


def test_aggregate_scores_empty():
    """Test nothing scored gives zero overall and empty breakdowns."""
    report = aggregate_scores([], explicit_overall=9.0)
    
    assert report.overall_score == 0
    assert report.skill_breakdown == []
    assert report.category_breakdown == []
    assert report.performance_metrics.median == 0


def test_category_breakdown():
    """Test category grouping uses the same rules as skills."""
    scored = [
        (q("Go", "design"), 4),
        (q("SQL", "conceptual"), 10),
        (q("Go", "design"), 8),
    ]
    report = aggregate_scores(scored)
    
    assert report.category_breakdown_dicts() == [
        {"category": "design", "average_score": 6, "question_count": 2},
        {"category": "conceptual", "average_score": 10, "question_count": 1},
    ]
