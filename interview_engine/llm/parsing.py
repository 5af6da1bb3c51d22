import json
import re
from typing import Any, Dict

_CODE_BLOCK = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Parse a JSON object from model output.

    Accepts bare JSON or JSON wrapped in a markdown code block.

    Raises:
        ValueError: if no JSON object can be decoded
    """
    if not text or not text.strip():
        raise ValueError("empty model response")

    match = _CODE_BLOCK.search(text)
    candidate = match.group(1) if match else text

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ValueError(f"model response is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ValueError("model response is not a JSON object")
    return parsed
