"""
Unit tests for the interview session engine.
Tests lifecycle transitions, cursor bounds, ownership isolation and
idempotent completion with a fake grader.
"""
import json
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from interview_engine.core.errors import (
    ErrorKind,
    GradingError,
    InvalidStateError,
    NotFoundError,
    OutOfRangeError,
)
from interview_engine.db.base import Base
from interview_engine.db.models import Answer, Interview, InterviewSession, SessionStatus
from interview_engine.domain import Scored, Unscored
from interview_engine.llm.answer_grader import AnswerGrader, OpenAIAnswerGrader
from interview_engine.llm.provider import LLMProvider, LLMResponse
from interview_engine.schemas.grading import BatchEvaluation, QuestionEvaluation
from interview_engine.services.session_engine import SessionEngine


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

OWNER = "owner-a"
INTRUDER = "owner-b"


class FakeGrader(AnswerGrader):
    """Scores answers from a fixed table and counts calls."""

    def __init__(self, scores=None, overall=None, fail_times=0, extra_indexes=()):
        self.scores = scores or {}
        self.overall = overall
        self.fail_times = fail_times
        self.extra_indexes = extra_indexes
        self.calls = 0
        self.last_answers = None

    def grade(self, questions, answers):
        self.calls += 1
        self.last_answers = list(answers)
        if self.fail_times > 0:
            self.fail_times -= 1
            raise GradingError("grader unavailable")

        evaluations = [
            QuestionEvaluation(
                question_index=a.question_index,
                score=self.scores.get(a.question_index, 5),
                feedback=f"feedback {a.question_index}",
                strengths=["clear"],
                weaknesses=["brief"],
            )
            for a in answers
        ]
        evaluations += [
            QuestionEvaluation(question_index=i, score=10, feedback="extra")
            for i in self.extra_indexes
        ]
        return BatchEvaluation(
            evaluations=evaluations,
            overall_score=self.overall,
            summary="Solid fundamentals",
            recommendations=["Go deeper on trade-offs"],
            interview_strengths=["Communication"],
            interview_weaknesses=["Depth"],
        )


class CannedProvider(LLMProvider):
    """Returns a fixed JSON payload from every chat call."""

    def __init__(self, payload):
        self.content = json.dumps(payload)

    def chat(self, messages, model, temperature=None, max_tokens=None, **kwargs):
        return LLMResponse(content=self.content, model=model)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


def make_interview(db, owner_id=OWNER, questions=None):
    if questions is None:
        questions = [
            {"skill": "Go", "text": "Explain goroutines", "difficulty": "intermediate", "category": "conceptual"},
            {"skill": "Go", "text": "Describe channel patterns", "difficulty": "intermediate", "category": "design"},
            {"skill": "SQL", "text": "Explain index trade-offs", "difficulty": "intermediate", "category": "conceptual"},
        ]
    interview = Interview(
        owner_id=owner_id,
        skills=sorted({q["skill"] for q in questions}),
        difficulty="intermediate",
        questions_per_skill=2,
        questions=questions,
        total_questions=len(questions),
    )
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview


@pytest.fixture
def interview(db):
    return make_interview(db)


@pytest.fixture
def started(db, interview):
    return SessionEngine(db).start(OWNER, interview.id).session


def answer_all(engine, session_id, count=3):
    for index in range(count):
        engine.submit_answer(session_id, OWNER, index, f"answer {index}")


# ----------------------------------------------------------------------
# start / current_question
# ----------------------------------------------------------------------

def test_start_creates_in_progress_session(db, interview):
    """Test starting returns the first question and an IN_PROGRESS session at index 0."""
    result = SessionEngine(db).start(OWNER, interview.id)

    assert result.session.status == SessionStatus.IN_PROGRESS
    assert result.session.current_question_index == 0
    assert result.session.started_at is not None
    assert result.question.text == "Explain goroutines"


def test_start_foreign_interview_not_found(db, interview):
    """Test another owner's interview looks missing."""
    with pytest.raises(NotFoundError):
        SessionEngine(db).start(INTRUDER, interview.id)


def test_start_missing_interview_not_found(db):
    with pytest.raises(NotFoundError):
        SessionEngine(db).start(OWNER, "does-not-exist")


def test_start_empty_interview_invalid_state(db):
    """Test an interview with zero questions cannot be started."""
    empty = make_interview(db, questions=[])

    with pytest.raises(InvalidStateError):
        SessionEngine(db).start(OWNER, empty.id)
    assert db.query(InterviewSession).count() == 0


def test_current_question_follows_cursor(db, started):
    engine = SessionEngine(db)

    assert engine.current_question(started.id, OWNER).text == "Explain goroutines"
    engine.advance(started.id, OWNER)
    assert engine.current_question(started.id, OWNER).text == "Describe channel patterns"


# ----------------------------------------------------------------------
# submit_answer / advance
# ----------------------------------------------------------------------

def test_submit_answer_does_not_move_cursor(db, started):
    """Test answering a question leaves the cursor where it was."""
    engine = SessionEngine(db)

    engine.submit_answer(started.id, OWNER, 0, "green threads")
    engine.submit_answer(started.id, OWNER, 0, "green threads, multiplexed on OS threads")

    session = engine.get_session(started.id, OWNER)
    answers = engine.list_answers(started.id, OWNER)
    assert session.current_question_index == 0
    assert len(answers) == 1
    assert answers[0].transcription == "green threads, multiplexed on OS threads"
    assert answers[0].question_text == "Explain goroutines"


def test_submit_answer_out_of_range(db, started):
    engine = SessionEngine(db)

    with pytest.raises(OutOfRangeError):
        engine.submit_answer(started.id, OWNER, 3, "too far")
    with pytest.raises(OutOfRangeError):
        engine.submit_answer(started.id, OWNER, -1, "negative")
    assert db.query(Answer).count() == 0


def test_advance_until_exhausted(db, started):
    """Test advance returns None at the end and never pushes the cursor past the total."""
    engine = SessionEngine(db)

    assert engine.advance(started.id, OWNER).text == "Describe channel patterns"
    assert engine.advance(started.id, OWNER).text == "Explain index trade-offs"
    assert engine.advance(started.id, OWNER) is None
    assert engine.advance(started.id, OWNER) is None

    session = engine.get_session(started.id, OWNER)
    assert session.current_question_index == 3
    assert engine.current_question(started.id, OWNER) is None


def test_answers_allowed_after_cursor_exhausted(db, started):
    engine = SessionEngine(db)
    for _ in range(3):
        engine.advance(started.id, OWNER)

    answer = engine.submit_answer(started.id, OWNER, 1, "late answer")
    assert answer.question_index == 1


# ----------------------------------------------------------------------
# complete
# ----------------------------------------------------------------------

def test_complete_grades_and_aggregates(db, started):
    """Test completion writes evaluations and skill/category/metric aggregates."""
    grader = FakeGrader(scores={0: 8, 1: 6, 2: 9})
    engine = SessionEngine(db, grader)
    answer_all(engine, started.id)

    result = engine.complete(started.id, OWNER)

    assert grader.calls == 1
    assert result.session.status == SessionStatus.COMPLETED
    assert result.session.completed_at is not None
    assert result.report.overall_score == pytest.approx(23 / 3)
    assert result.report.skill_breakdown_dicts() == [
        {"skill": "Go", "average_score": 7, "question_count": 2},
        {"skill": "SQL", "average_score": 9, "question_count": 1},
    ]
    assert result.report.category_breakdown_dicts() == [
        {"category": "conceptual", "average_score": 8.5, "question_count": 2},
        {"category": "design", "average_score": 6, "question_count": 1},
    ]
    metrics = result.report.performance_metrics
    assert (metrics.min, metrics.max, metrics.median) == (6, 9, 8)

    stored = engine.list_answers(started.id, OWNER)
    assert all(isinstance(a.grade, Scored) for a in stored)
    assert stored[1].grade.score == 6

    session = engine.get_session(started.id, OWNER)
    assert session.overall_score == pytest.approx(23 / 3)
    assert session.skill_breakdown[0]["skill"] == "Go"
    assert session.performance_metrics == {"min": 6, "max": 9, "median": 8}
    assert session.summary == "Solid fundamentals"
    assert session.recommendations == ["Go deeper on trade-offs"]


def test_complete_is_idempotent(db, started):
    """Test a second completion replays stored results without grading again."""
    grader = FakeGrader(scores={0: 8, 1: 6, 2: 9}, overall=7.9)
    engine = SessionEngine(db, grader)
    answer_all(engine, started.id)

    first = engine.complete(started.id, OWNER)
    second = engine.complete(started.id, OWNER)

    assert grader.calls == 1
    assert second.replayed is True
    assert second.report.overall_score == first.report.overall_score == pytest.approx(7.9)
    assert second.report.skill_breakdown == first.report.skill_breakdown
    assert second.report.category_breakdown == first.report.category_breakdown
    assert second.report.performance_metrics == first.report.performance_metrics
    assert second.summary == first.summary
    assert [e.question_index for e in second.evaluations] == [0, 1, 2]


def test_complete_clamps_grader_scores(db, started):
    """Test scores outside [0, 10] are clamped before storing and aggregating."""
    grader = FakeGrader(scores={0: 12.0, 1: -3, 2: 5})
    engine = SessionEngine(db, grader)
    answer_all(engine, started.id)

    result = engine.complete(started.id, OWNER)

    assert [e.score for e in result.evaluations] == [10.0, 0.0, 5.0]
    assert result.report.performance_metrics.max == 10.0
    assert result.report.performance_metrics.min == 0.0


def test_complete_drops_evaluations_without_answers(db, started):
    """Test extra grader entries for unanswered indexes are ignored."""
    grader = FakeGrader(scores={0: 4}, extra_indexes=(2, 7))
    engine = SessionEngine(db, grader)
    engine.submit_answer(started.id, OWNER, 0, "only answer")

    result = engine.complete(started.id, OWNER)

    assert [e.question_index for e in result.evaluations] == [0]
    assert result.report.overall_score == 4
    assert db.query(Answer).count() == 1


def test_complete_openai_grader_without_overall_uses_matched_mean(db, started):
    """Test the overall is the mean of answered scores when the grader omits it."""
    provider = CannedProvider({
        "evaluations": [
            {"questionIndex": 0, "score": 8, "feedback": "good"},
            {"questionIndex": 2, "score": 0, "feedback": "not answered"},
        ],
        "summary": "Short interview",
    })
    engine = SessionEngine(db, OpenAIAnswerGrader(provider, model="test-model"))
    engine.submit_answer(started.id, OWNER, 0, "goroutines are green threads")

    result = engine.complete(started.id, OWNER)

    assert [e.question_index for e in result.evaluations] == [0]
    assert result.report.overall_score == 8.0
    assert result.report.performance_metrics.to_dict() == {"min": 8.0, "max": 8.0, "median": 8.0}
    assert result.session.reported_overall_score is None

    replay = engine.complete(started.id, OWNER)
    assert replay.report.overall_score == 8.0


def test_complete_with_partial_answers(db, started):
    """Test only answered questions participate in the aggregates."""
    grader = FakeGrader(scores={2: 9})
    engine = SessionEngine(db, grader)
    engine.submit_answer(started.id, OWNER, 2, "sql answer")

    result = engine.complete(started.id, OWNER)

    assert len(grader.last_answers) == 1
    assert result.report.skill_breakdown_dicts() == [
        {"skill": "SQL", "average_score": 9, "question_count": 1},
    ]


def test_complete_without_answers_invalid_state(db, started):
    """Test completing with no answers fails and leaves the session untouched."""
    grader = FakeGrader()
    engine = SessionEngine(db, grader)

    with pytest.raises(InvalidStateError):
        engine.complete(started.id, OWNER)

    assert grader.calls == 0
    assert engine.get_session(started.id, OWNER).status == SessionStatus.IN_PROGRESS


def test_complete_grading_failure_is_retriable(db, started):
    """Test a grading failure writes nothing and a retry succeeds."""
    grader = FakeGrader(scores={0: 7, 1: 7, 2: 7}, fail_times=1)
    engine = SessionEngine(db, grader)
    answer_all(engine, started.id)

    with pytest.raises(GradingError) as exc_info:
        engine.complete(started.id, OWNER)
    assert exc_info.value.kind == ErrorKind.GRADING_ERROR

    session = engine.get_session(started.id, OWNER)
    assert session.status == SessionStatus.IN_PROGRESS
    assert session.completed_at is None
    assert session.overall_score is None
    assert all(isinstance(a.grade, Unscored) for a in engine.list_answers(started.id, OWNER))

    result = engine.complete(started.id, OWNER)
    assert result.session.status == SessionStatus.COMPLETED
    assert grader.calls == 2


def test_unexpected_grader_exception_becomes_grading_error(db, started):
    class BrokenGrader(AnswerGrader):
        def grade(self, questions, answers):
            raise RuntimeError("socket closed")

    engine = SessionEngine(db, BrokenGrader())
    engine.submit_answer(started.id, OWNER, 0, "answer")

    with pytest.raises(GradingError):
        engine.complete(started.id, OWNER)
    assert engine.get_session(started.id, OWNER).status == SessionStatus.IN_PROGRESS


def test_complete_without_grader(db, started):
    engine = SessionEngine(db)
    engine.submit_answer(started.id, OWNER, 0, "answer")

    with pytest.raises(GradingError):
        engine.complete(started.id, OWNER)


def test_replay_with_no_stored_evaluations_reports_zero(db, interview):
    """Test replaying a completed session with no graded answers reports zeros."""
    session = InterviewSession(
        interview_id=interview.id,
        owner_id=OWNER,
        status=SessionStatus.COMPLETED,
        current_question_index=3,
    )
    db.add(session)
    db.commit()

    result = SessionEngine(db).complete(session.id, OWNER)

    assert result.replayed is True
    assert result.evaluations == []
    assert result.report.overall_score == 0
    assert result.report.skill_breakdown == []
    assert result.report.performance_metrics.median == 0


def test_completed_session_rejects_mutation(db, started):
    """Test submit and advance fail once the session is completed."""
    engine = SessionEngine(db, FakeGrader())
    answer_all(engine, started.id)
    engine.complete(started.id, OWNER)

    with pytest.raises(InvalidStateError):
        engine.submit_answer(started.id, OWNER, 0, "changed my mind")
    with pytest.raises(InvalidStateError):
        engine.advance(started.id, OWNER)


# ----------------------------------------------------------------------
# ownership and queries
# ----------------------------------------------------------------------

def test_ownership_isolation(db, started):
    """Test every session operation from another owner fails NotFound first."""
    engine = SessionEngine(db, FakeGrader())
    engine.submit_answer(started.id, OWNER, 0, "mine")

    calls = [
        lambda: engine.current_question(started.id, INTRUDER),
        lambda: engine.submit_answer(started.id, INTRUDER, 99, "out of range for anyone"),
        lambda: engine.advance(started.id, INTRUDER),
        lambda: engine.complete(started.id, INTRUDER),
        lambda: engine.get_session(started.id, INTRUDER),
        lambda: engine.list_answers(started.id, INTRUDER),
    ]
    for call in calls:
        with pytest.raises(NotFoundError):
            call()


def test_ownership_checked_before_state(db, started):
    """Test a completed foreign session still reports NotFound, not InvalidState."""
    engine = SessionEngine(db, FakeGrader())
    answer_all(engine, started.id)
    engine.complete(started.id, OWNER)

    with pytest.raises(NotFoundError):
        engine.submit_answer(started.id, INTRUDER, 0, "x")


def test_list_sessions_filters_by_owner_and_status(db, interview):
    engine = SessionEngine(db, FakeGrader())
    first = engine.start(OWNER, interview.id).session
    engine.start(OWNER, interview.id)
    other_interview = make_interview(db, owner_id=INTRUDER)
    engine.start(INTRUDER, other_interview.id)

    engine.submit_answer(first.id, OWNER, 0, "answer")
    engine.complete(first.id, OWNER)

    assert len(engine.list_sessions(OWNER)) == 2
    completed = engine.list_sessions(OWNER, SessionStatus.COMPLETED)
    assert [s.id for s in completed] == [first.id]
    assert len(engine.list_sessions(INTRUDER)) == 1


def test_cursor_invariant_holds(db, started):
    """Test 0 <= current_question_index <= total after every operation."""
    engine = SessionEngine(db, FakeGrader())
    total = 3

    def check():
        index = engine.get_session(started.id, OWNER).current_question_index
        assert 0 <= index <= total

    for step in range(5):
        engine.submit_answer(started.id, OWNER, min(step, total - 1), f"answer {step}")
        check()
        engine.advance(started.id, OWNER)
        check()
    engine.complete(started.id, OWNER)
    check()
