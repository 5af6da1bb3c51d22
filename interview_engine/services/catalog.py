"""
Read-only view over an interview's fixed, ordered question list.
"""
from typing import List, Sequence

from interview_engine.core.errors import OutOfRangeError
from interview_engine.domain import Question


class InterviewCatalog:
    """Bounds-checked question lookup by index."""

    def __init__(self, questions: Sequence[Question]):
        self._questions: tuple = tuple(questions)

    @classmethod
    def from_interview(cls, interview) -> "InterviewCatalog":
        return cls(Question.from_dict(q) for q in (interview.questions or []))

    def __len__(self) -> int:
        return len(self._questions)

    def length(self) -> int:
        return len(self._questions)

    def contains_index(self, index: int) -> bool:
        return 0 <= index < len(self._questions)

    def by_index(self, index: int) -> Question:
        if not self.contains_index(index):
            raise OutOfRangeError(
                f"Question index {index} is outside [0, {len(self._questions)})"
            )
        return self._questions[index]

    def questions(self) -> List[Question]:
        return list(self._questions)
