"""Model-backed health analysis of individual menu items."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pydantic import ValidationError

from nutriguard.adapters.gemini_client import GeminiClient, GenerationResponse
from nutriguard.domain.analysis import (
    NUTRITION_KEYS,
    AnalysisPayload,
    GenerateContentEnvelope,
    HealthAnalysis,
)
from nutriguard.domain.errors import AugmentationUnavailableError, TransportError
from nutriguard.domain.menu import MenuItem
from nutriguard.domain.profile import UserHealthProfile
from nutriguard.services.rate_limit import RateLimiter

FALLBACK_NUTRITION_VALUE = "Analysis needed"
_MIN_NAME_LENGTH = 3
_GENERIC_NAMES = {"cafe"}
_HTTP_OK = 200

_PROMPT_TEMPLATE = """\
Return ONLY a JSON response analyzing this menu item. No explanations or questions.

ITEM DETAILS:
Name: {name}
Description: {description}
Cuisine: {cuisine}

USER PROFILE:
Health Conditions: {conditions}
Allergies: {allergies}
Diet Type: {diet}

TASK:
1. Analyze the dish based on its name, description, and cuisine.
2. Provide accurate nutritional estimates based on standard serving size.
3. Consider cooking method, ingredients, and portion size.

REQUIRED FORMAT:
{{
    "isHealthy": false,
    "reason": "one sentence about safety for this user",
    "healthImpacts": [
        "key impact for user condition",
        "key risk if relevant"
    ],
    "recommendations": [
        "main modification if needed",
        "alternative suggestion"
    ],
    "nutritionalInfo": {{
        "Calories": "estimated calories based on ingredients and portion",
        "Protein": "estimated protein content in grams",
        "Carbs": "estimated carbohydrate content in grams",
        "Fat": "estimated fat content in grams",
        "Fiber": "estimated fiber content in grams",
        "Sugar": "estimated sugar content in grams",
        "Sodium": "estimated sodium content in mg"
    }}
}}
"""

_logger = logging.getLogger(__name__)


def build_prompt(item: MenuItem, profile: UserHealthProfile) -> str:
    """Render the analysis prompt for one item and profile."""
    return _PROMPT_TEMPLATE.format(
        name=item.name,
        description=item.description,
        cuisine=item.cuisine,
        conditions=", ".join(profile.chronic_conditions),
        allergies=", ".join(profile.food_allergies),
        diet=profile.diet_type or "None",
    )


def fallback_analysis() -> tuple[HealthAnalysis, dict[str, str]]:
    """Return the fixed result used whenever analysis cannot complete."""
    analysis = HealthAnalysis(
        is_healthy=True,
        reason=(
            "Unable to perform detailed analysis at the moment. "
            "Please try again in a few minutes."
        ),
        health_impacts=["No specific health impacts could be determined at this time."],
        recommendations=[
            "Consider checking with staff about ingredients and preparation methods.",
            "Try analyzing this item again in a few minutes.",
        ],
    )
    return analysis, dict.fromkeys(NUTRITION_KEYS, FALLBACK_NUTRITION_VALUE)


def strip_code_fence(text: str) -> str:
    """Remove Markdown code-fence wrapping around a JSON body."""
    return text.replace("```json", "").replace("```", "").strip()


def parse_generation(response: GenerationResponse) -> AnalysisPayload:
    """Validate a raw generation response into an analysis payload.

    Raises ``ValueError`` (including pydantic's ``ValidationError`` and
    ``json.JSONDecodeError``) when any layer has the wrong shape.
    """
    if response.status_code != _HTTP_OK:
        raise ValueError(f"Unexpected status code {response.status_code}")
    envelope = GenerateContentEnvelope.model_validate_json(response.body)
    inner = json.loads(strip_code_fence(envelope.first_text()))
    return AnalysisPayload.model_validate(inner, strict=True)


@dataclass
class MenuAnalysisService:
    """Requests narrative analysis for menu items with throttling and retry."""

    client: GeminiClient
    rate_limiter: RateLimiter
    max_retries: int = 3
    initial_retry_delay_seconds: float = 2.0
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def analyze_menu_item(
        self, item: MenuItem, profile: UserHealthProfile
    ) -> tuple[HealthAnalysis, dict[str, str]]:
        """Return the model's analysis and nutrition map, or the fallback pair."""
        if len(item.name) < _MIN_NAME_LENGTH or item.name.lower() in _GENERIC_NAMES:
            _logger.info("Skipping analysis for generic item name: %s", item.name)
            return fallback_analysis()

        prompt = build_prompt(item, profile)
        try:
            response = await self._generate_with_retry(prompt)
        except AugmentationUnavailableError as exc:
            _logger.warning("Analysis unavailable for %s: %s", item.name, exc)
            return fallback_analysis()

        if response.status_code != _HTTP_OK:
            _logger.warning(
                "Analysis request failed for %s (status=%s): %s",
                item.name,
                response.status_code,
                response.body[:500],
            )
            return fallback_analysis()

        try:
            payload = parse_generation(response)
        except (ValueError, ValidationError) as exc:
            _logger.warning("Invalid analysis response for %s: %s", item.name, exc)
            return fallback_analysis()
        return payload.to_analysis(), dict(payload.nutritional_info)

    async def augment_item(
        self, item: MenuItem, profile: UserHealthProfile
    ) -> HealthAnalysis:
        """Analyze an item and replace its nutritional info in place."""
        analysis, nutritional_info = await self.analyze_menu_item(item, profile)
        item.nutritional_info = nutritional_info
        return analysis

    async def augment_items(
        self, items: list[MenuItem], profile: UserHealthProfile
    ) -> list[HealthAnalysis]:
        """Augment several items concurrently; the rate limiter spaces dispatch."""
        return list(
            await asyncio.gather(*(self.augment_item(item, profile) for item in items))
        )

    async def _generate_with_retry(self, prompt: str) -> GenerationResponse:
        """Send a prompt, retrying transport failures with exponential backoff.

        Raises ``AugmentationUnavailableError`` once ``max_retries`` extra
        attempts have failed. Responses with an error status are returned
        as-is and never retried.
        """
        attempt = 0
        while True:
            await self.rate_limiter.acquire()
            try:
                return await self.client.generate_content(prompt)
            except TransportError as exc:
                if attempt >= self.max_retries:
                    raise AugmentationUnavailableError(attempt + 1) from exc
                delay = self.initial_retry_delay_seconds * (2**attempt)
                attempt += 1
                _logger.warning(
                    "Model request failed (attempt %s/%s), retrying in %.1fs: %s",
                    attempt,
                    self.max_retries + 1,
                    delay,
                    exc,
                )
                await self.sleep(delay)
