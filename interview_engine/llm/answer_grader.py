"""
Answer grader collaborator.

`AnswerGrader` is the capability the session engine depends on;
`OpenAIAnswerGrader` is the production implementation.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from openai import APIError
from pydantic import ValidationError

from interview_engine.core.config import GRADING_TEMPERATURE
from interview_engine.core.errors import GradingError
from interview_engine.domain import Question
from interview_engine.llm.parsing import parse_json_object
from interview_engine.llm.prompts import GRADING_SYSTEM_PROMPT, build_grading_prompt
from interview_engine.llm.provider import LLMProvider
from interview_engine.llm.router import get_model_for_feature
from interview_engine.schemas.grading import BatchEvaluation, GradingAnswer

logger = logging.getLogger(__name__)


class AnswerGrader(ABC):
    @abstractmethod
    def grade(
        self,
        questions: Sequence[Question],
        answers: Sequence[GradingAnswer],
    ) -> BatchEvaluation:
        """
        Score every answer and summarize the interview in one pass.

        Raises:
            GradingError: on collaborator failure or unusable output
        """


class OpenAIAnswerGrader(AnswerGrader):
    def __init__(
        self,
        provider: LLMProvider,
        model: Optional[str] = None,
        temperature: float = GRADING_TEMPERATURE,
    ):
        self.provider = provider
        self.model = model or get_model_for_feature("answer_grading")
        self.temperature = temperature

    def grade(
        self,
        questions: Sequence[Question],
        answers: Sequence[GradingAnswer],
    ) -> BatchEvaluation:
        if not questions or not answers:
            raise GradingError("Questions and answers are required")

        if len(questions) != len(answers):
            logger.warning(f"Mismatch: {len(questions)} questions but {len(answers)} answers")

        logger.info(f"Evaluating {len(answers)} answers for {len(questions)} questions")

        messages = [
            {"role": "system", "content": GRADING_SYSTEM_PROMPT},
            {"role": "user", "content": build_grading_prompt(list(questions), list(answers))},
        ]

        try:
            response = self.provider.chat(
                messages,
                model=self.model,
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
            payload = parse_json_object(response.content)
            result = BatchEvaluation.model_validate(payload)
        except APIError as e:
            logger.error(f"Grading call failed: {e}", exc_info=True)
            raise GradingError(f"Evaluation failed: {e}") from e
        except ValidationError as e:
            logger.error(f"Grader returned an invalid evaluation: {e}")
            raise GradingError("Invalid evaluation response format") from e
        except ValueError as e:
            logger.error(f"Grader returned unusable output: {e}")
            raise GradingError("Failed to parse evaluation results. Please try again.") from e

        if result.overall_score is not None:
            logger.info(f"Evaluation completed. Overall score: {result.overall_score:.2f}")
        return result
