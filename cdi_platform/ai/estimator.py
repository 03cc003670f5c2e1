"""Estimate generation through Pydantic AI.

The generator asks the model for plain text, strips any Markdown code fence,
then validates the JSON into ``GeneratedEstimate``. There is no retry: a
failed call or an unparseable answer is raised to the caller, who decides
whether to ask again.

Responsibilities
----------------

- Build the text-only or photo-assisted prompt.
- Prepare photos (letterbox to a square) concurrently before upload.
- Convert model failures and parse failures into typed errors.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional, Sequence

from pydantic import ValidationError
from pydantic_ai import Agent, BinaryContent
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider

from cdi_platform.server.core.config import GoogleAIConfig

from .errors import AIConfigurationError, AIServiceError, EstimateParseError
from .images import DEFAULT_TARGET_DIMENSION, resize_to_square
from .models import GeneratedEstimate
from .prompts import ESTIMATOR_SYSTEM_PROMPT, build_image_estimate_prompt, build_text_estimate_prompt

logger = logging.getLogger(__name__)

PARSE_ERROR_MESSAGE = "Failed to parse estimate from AI response. The AI returned invalid JSON. Please try again."


def build_google_model(config: GoogleAIConfig) -> GoogleModel:
    """Create the Gemini model used for estimates.

    Raises:
        AIConfigurationError: no API key is configured
    """
    api_key = config.api_key.get_secret_value() if config.api_key else None
    if not api_key:
        raise AIConfigurationError("API key is required")
    logger.debug(f"Creating Google model: {config.model} with Pydantic AI")
    return GoogleModel(config.model, provider=GoogleProvider(api_key=api_key))


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence from a model answer."""
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[len("```"):]
    else:
        return cleaned
    if cleaned.rstrip().endswith("```"):
        cleaned = cleaned.rstrip()[:-3]
    return cleaned.strip()


def parse_estimate_response(text: str) -> GeneratedEstimate:
    """Parse a model answer into an estimate.

    Raises:
        EstimateParseError: the answer is not JSON or misses required fields
    """
    cleaned = strip_code_fence(text)
    try:
        estimate = GeneratedEstimate.model_validate(json.loads(cleaned))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to parse AI response as JSON: {e}")
        raise EstimateParseError(PARSE_ERROR_MESSAGE, details=text) from e

    items_total = estimate.line_item_total()
    if estimate.line_items and abs(items_total - estimate.subtotal) > 0.01:
        logger.warning(f"Estimate subtotal {estimate.subtotal:.2f} differs from line item total {items_total:.2f}")
    return estimate


async def prepare_images(images: Sequence[bytes], target_dimension: int = DEFAULT_TARGET_DIMENSION) -> list[bytes]:
    """Letterbox every photo to a square JPEG, in parallel worker threads."""
    return list(await asyncio.gather(*(asyncio.to_thread(resize_to_square, img, target_dimension) for img in images)))


class EstimateGenerator:
    """Generate construction estimates with a language model.

    ``model`` is any Pydantic AI model (or model name). With ``model=None``
    every call raises ``AIConfigurationError``, which is how a deployment
    without an API key behaves.
    """

    def __init__(self, *, model: Any | None = None) -> None:
        self._model = model

    @classmethod
    def from_config(cls, config: GoogleAIConfig) -> "EstimateGenerator":
        """Build a generator from settings, without a model when no key is set."""
        try:
            return cls(model=build_google_model(config))
        except AIConfigurationError:
            logger.warning("GOOGLE_API_KEY is not set; AI estimates are disabled")
            return cls(model=None)

    def _agent(self, system_prompt: Optional[str] = ESTIMATOR_SYSTEM_PROMPT) -> Agent:
        if self._model is None:
            raise AIConfigurationError("API key is required")
        if system_prompt:
            return Agent(self._model, output_type=str, system_prompt=system_prompt)
        return Agent(self._model, output_type=str)

    async def _run(self, agent: Agent, prompt: Any) -> str:
        try:
            result = await agent.run(prompt)
        except Exception as e:
            logger.error(f"AI call failed: {e}", exc_info=True)
            raise AIServiceError(
                f"AI API Error: {e}. Please check your API key and network connection.",
                details=type(e).__name__,
            ) from e
        return result.output

    async def from_description(self, description: str, zip_code: str) -> GeneratedEstimate:
        """Estimate a project from its written description.

        Args:
            description: Free-text project description
            zip_code: Project ZIP code, used for regional pricing

        Returns:
            Parsed estimate
        """
        agent = self._agent()
        logger.info(f"Generating estimate from description for ZIP {zip_code}")
        text = await self._run(agent, build_text_estimate_prompt(description, zip_code))
        return parse_estimate_response(text)

    async def from_images(self, description: str, zip_code: str, images: Sequence[bytes]) -> GeneratedEstimate:
        """Estimate a project from a description plus photos.

        Falls back to ``from_description`` when no photos are given.

        Args:
            description: Free-text project description
            zip_code: Project ZIP code
            images: Encoded photos in any Pillow-readable format

        Returns:
            Parsed estimate
        """
        if not images:
            return await self.from_description(description, zip_code)
        agent = self._agent()
        prepared = await prepare_images(images)
        logger.info(f"Generating estimate from {len(prepared)} image(s) for ZIP {zip_code}")
        prompt = [
            build_image_estimate_prompt(description, zip_code, len(prepared)),
            *(BinaryContent(data=img, media_type="image/jpeg") for img in prepared),
        ]
        text = await self._run(agent, prompt)
        return parse_estimate_response(text)

    async def complete(self, prompt: str) -> str:
        """Free-form text completion with no system prompt."""
        return await self._run(self._agent(system_prompt=None), prompt)
