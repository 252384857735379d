"""LLM client for itinerary generation with OpenAI integration.

Security: Reads API key from environment only, never hardcoded.
When no key is configured, get_llm_client() returns None and callers use the
deterministic fallback generator instead.
"""

import logging
from typing import Protocol

from openai import AsyncOpenAI

from backend.app.config import get_settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert travel planner. Generate detailed, budget-optimized itineraries "
    "based on user preferences. Return only valid JSON."
)


class ItineraryLLMClient(Protocol):
    """Protocol for LLM client implementations."""

    async def complete(self, *, system_prompt: str, user_prompt: str) -> str:
        """Return the raw text completion for an itinerary prompt.

        Args:
            system_prompt: Role instructions for the model
            user_prompt: Trip-specific prompt

        Returns:
            Raw completion text (expected to contain a JSON object)
        """
        ...


class OpenAIItineraryClient:
    """OpenAI-backed LLM client."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout_s: float = 30.0):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use
            timeout_s: Request timeout in seconds
        """
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout_s)
        self.model = model

    async def complete(self, *, system_prompt: str, user_prompt: str) -> str:
        """Call the chat completions API and return the message content."""
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=0.7,
            max_tokens=4000,
        )
        return response.choices[0].message.content or ""


def get_llm_client() -> ItineraryLLMClient | None:
    """Factory function to get an LLM client based on config.

    Returns:
        OpenAIItineraryClient if an API key is configured, None otherwise
    """
    settings = get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for itinerary generation")
        return OpenAIItineraryClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            timeout_s=settings.llm_timeout_s,
        )

    logger.warning("No OpenAI API key configured, itineraries will use the local fallback")
    return None
