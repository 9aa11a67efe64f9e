import logging
from typing import Any, Dict

import openai

from pathfinder.core.config import settings
from pathfinder.ai.prompts import RECOMMENDATION_PROMPTS

logger = logging.getLogger(__name__)


class RecommendationError(Exception):
    """Base error for a failed recommendation request. Carries the HTTP status to surface."""
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RateLimitedError(RecommendationError):
    status_code = 429

    def __init__(self, message: str = "Rate limits exceeded, please try again later."):
        super().__init__(message)


class PaymentRequiredError(RecommendationError):
    status_code = 402

    def __init__(self, message: str = "Payment required, please add funds to your workspace."):
        super().__init__(message)


class GatewayError(RecommendationError):
    status_code = 500

    def __init__(self, message: str = "AI gateway error"):
        super().__init__(message)


class InvalidRecommendationError(RecommendationError):
    status_code = 422


def translate_gateway_error(exc: Exception) -> RecommendationError:
    """Maps an OpenAI SDK exception onto the app's error taxonomy."""
    if isinstance(exc, openai.RateLimitError):
        return RateLimitedError()
    if isinstance(exc, openai.APIStatusError) and exc.status_code == 402:
        return PaymentRequiredError()
    return GatewayError()


def create_gateway_client():
    if not settings.AI_API_KEY:
        return None
    return openai.AsyncOpenAI(
        api_key=settings.AI_API_KEY,
        base_url=settings.AI_GATEWAY_URL,
        max_retries=0,
    )


class RecommendationClient:
    """Sends a profile to the AI gateway and returns the decoded JSON object it answers with."""

    def __init__(self, async_client=None, model: str = None):
        self.async_client = async_client if async_client is not None else create_gateway_client()
        self.model = model or settings.AI_MODEL

    @property
    def is_configured(self) -> bool:
        return self.async_client is not None

    def build_messages(self, kind: str, profile_data: Dict[str, Any]) -> list[dict]:
        system_prompt, build_user_prompt = RECOMMENDATION_PROMPTS[kind]
        return [
            {"role": "system", "content": system_prompt.strip()},
            {"role": "user", "content": build_user_prompt(profile_data)},
        ]

    async def fetch(self, kind: str, profile_data: Dict[str, Any]) -> str:
        """
        Returns the raw message content (expected to be a JSON object string).
        Validation is left to the caller.

        Raises RecommendationError subclasses; never retries.
        """
        if not self.is_configured:
            raise GatewayError("AI gateway is not configured")

        logger.info(f"Generating {kind} recommendations")
        try:
            response = await self.async_client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(kind, profile_data),
                response_format={"type": "json_object"},
            )
        except openai.APIError as e:
            logger.error(f"AI gateway error ({kind}): {e}")
            raise translate_gateway_error(e) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.error(f"AI gateway returned an empty {kind} recommendation")
            raise GatewayError()

        logger.info(f"{kind.capitalize()} recommendations generated successfully")
        return content


recommendation_client = RecommendationClient()


def get_recommendation_client() -> RecommendationClient:
    return recommendation_client
