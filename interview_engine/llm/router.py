"""
Model router for selecting the model used by each collaborator.
"""
from interview_engine.core.config import GENERATION_MODEL, GRADING_MODEL, OPENAI_API_KEY

DEFAULT_MODEL = "gpt-4o-mini"

MODEL_ROUTING = {
    "question_generation": GENERATION_MODEL,
    "answer_grading": GRADING_MODEL,
}


def get_model_for_feature(feature: str) -> str:
    """
    Get the model for a feature.
    
    Args:
        feature: "question_generation" or "answer_grading"
        
    Returns:
        Model identifier string
    """
    return MODEL_ROUTING.get(feature) or DEFAULT_MODEL


def is_model_available() -> bool:
    """Check if a model can be called (OpenAI configured)."""
    return bool(OPENAI_API_KEY)
