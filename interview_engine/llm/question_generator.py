"""
Question generator collaborator.

`QuestionGenerator` is the capability the interview service depends on;
`OpenAIQuestionGenerator` is the production implementation.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from openai import APIError

from interview_engine.core.errors import GenerationError
from interview_engine.domain import Question
from interview_engine.llm.parsing import parse_json_object
from interview_engine.llm.prompts import GENERATION_SYSTEM_PROMPT, build_generation_prompt
from interview_engine.llm.provider import LLMProvider
from interview_engine.llm.router import get_model_for_feature

logger = logging.getLogger(__name__)


class QuestionGenerator(ABC):
    @abstractmethod
    def generate(
        self,
        skills: Sequence[str],
        per_skill: int,
        difficulty: str,
        context: Optional[str] = None,
    ) -> List[Question]:
        """
        Produce interview questions for the given skills.

        Raises:
            GenerationError: on malformed or empty output
        """


def _question_from_payload(item: Dict[str, Any]) -> Question:
    def text(key: str) -> str:
        value = item.get(key)
        return value.strip() if isinstance(value, str) else ""

    expected = item.get("expectedAnswer") or item.get("expected_answer")
    return Question(
        skill=text("skill"),
        text=text("question") or text("text"),
        difficulty=text("difficulty"),
        category=text("category"),
        expected_answer=expected if isinstance(expected, str) and expected.strip() else None,
    )


def parse_questions(payload: Dict[str, Any]) -> List[Question]:
    """Map a `{"questions": [...]}` payload to Question records."""
    items = payload.get("questions")
    if not isinstance(items, list):
        raise GenerationError("Invalid response format from question generator")
    return [_question_from_payload(item) for item in items if isinstance(item, dict)]


class OpenAIQuestionGenerator(QuestionGenerator):
    def __init__(self, provider: LLMProvider, model: Optional[str] = None):
        self.provider = provider
        self.model = model or get_model_for_feature("question_generation")

    def generate(
        self,
        skills: Sequence[str],
        per_skill: int,
        difficulty: str,
        context: Optional[str] = None,
    ) -> List[Question]:
        logger.info(
            f"Generating interview for skills: {', '.join(skills)}, "
            f"{per_skill} questions per skill, difficulty: {difficulty}"
        )
        messages = [
            {"role": "system", "content": GENERATION_SYSTEM_PROMPT},
            {"role": "user", "content": build_generation_prompt(skills, per_skill, difficulty, context)},
        ]

        try:
            response = self.provider.chat(
                messages,
                model=self.model,
                response_format={"type": "json_object"},
            )
            payload = parse_json_object(response.content)
        except APIError as e:
            logger.error(f"Question generation call failed: {e}", exc_info=True)
            raise GenerationError(f"Interview generation failed: {e}") from e
        except ValueError as e:
            logger.error(f"Question generation returned unusable output: {e}")
            raise GenerationError("Failed to parse interview questions. Please try again.") from e

        questions = parse_questions(payload)
        if not questions:
            raise GenerationError("Question generator returned no questions")

        logger.info(f"Generated {len(questions)} interview questions")
        return questions
