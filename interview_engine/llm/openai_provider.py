"""
OpenAI provider implementation.
"""
import logging
from typing import Optional, Dict
from openai import OpenAI, APIError

from interview_engine.core.config import OPENAI_API_KEY
from interview_engine.llm.provider import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)

# Model pricing per 1M tokens (input/output)
MODEL_PRICING = {
    "gpt-4o-mini": {"input": 0.15, "output": 0.60},
    "gpt-4o": {"input": 2.50, "output": 10.00},
}


class OpenAIProvider(LLMProvider):
    """OpenAI provider using official OpenAI SDK."""
    
    def __init__(self, api_key: Optional[str] = None, client: Optional[OpenAI] = None):
        """Initialize OpenAI client."""
        self.api_key = api_key or OPENAI_API_KEY
        if client is None and not self.api_key:
            raise ValueError("OPENAI_API_KEY not configured")
        self.client = client or OpenAI(api_key=self.api_key.strip())
        logger.info("OpenAI provider initialized")
    
    def chat(
        self,
        messages: list[Dict[str, str]],
        model: str = "gpt-4o-mini",
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate a chat completion."""
        params = dict(
            model=model,
            messages=messages,
            max_tokens=max_tokens or 4000,
            **kwargs
        )
        if temperature is not None:
            params["temperature"] = temperature
        
        try:
            response = self.client.chat.completions.create(**params)
        except APIError as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            raise
        
        content = response.choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        tokens_in = getattr(usage, "prompt_tokens", 0) or 0
        tokens_out = getattr(usage, "completion_tokens", 0) or 0
        cost = self.estimate_cost(tokens_in, tokens_out, model)
        logger.debug(f"OpenAI call: model={model}, tokens_in={tokens_in}, tokens_out={tokens_out}, cost=${cost:.5f}")
        
        return LLMResponse(
            content=content,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            model=model,
            cost_estimate=cost,
            metadata={
                "finish_reason": response.choices[0].finish_reason,
            }
        )
    
    def estimate_cost(self, tokens_in: int, tokens_out: int, model: str) -> float:
        """Estimate cost in USD."""
        pricing = MODEL_PRICING.get(model, {"input": 0.15, "output": 0.60})
        cost_input = (tokens_in / 1_000_000) * pricing["input"]
        cost_output = (tokens_out / 1_000_000) * pricing["output"]
        return cost_input + cost_output
