"""
Error taxonomy for the interview session engine.

Every failure the engine reports carries an explicit ErrorKind so the HTTP
boundary can map it to a structured response without inspecting messages.
"""
import enum


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    OUT_OF_RANGE = "out_of_range"
    GENERATION_ERROR = "generation_error"
    GRADING_ERROR = "grading_error"


class InterviewEngineError(Exception):
    """Base class for all engine failures."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


class NotFoundError(InterviewEngineError):
    """Record is missing or belongs to another owner. Both cases look identical."""

    kind = ErrorKind.NOT_FOUND


class InvalidStateError(InterviewEngineError):
    kind = ErrorKind.INVALID_STATE


class OutOfRangeError(InterviewEngineError):
    kind = ErrorKind.OUT_OF_RANGE


class GenerationError(InterviewEngineError):
    """Question generator failed or returned unusable output."""

    kind = ErrorKind.GENERATION_ERROR


class GradingError(InterviewEngineError):
    """Answer grader failed or returned unusable output."""

    kind = ErrorKind.GRADING_ERROR
