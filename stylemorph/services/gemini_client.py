"""Gemini API client for multi-outfit virtual try-on generation."""

import logging

from google import genai
from google.genai import types

from ..config import GeminiConfig
from ..models import GenerationOutcome, GenerationRequest
from . import payload_codec

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to generate image"


class GeminiTryOnClient:
    """Client for the Gemini image model's try-on call."""

    def __init__(self, config: GeminiConfig):
        self.config = config
        self._client: genai.Client | None = None

    @property
    def client(self) -> genai.Client:
        """Get or create the Gemini client."""
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        """Generate one outfit's try-on render.

        Never raises: any error from encoding or the service call comes back
        as a failure outcome for this outfit only.
        """
        try:
            parts = payload_codec.encode(request)
            logger.info(
                f"Requesting try-on for outfit {request.outfit_identity} "
                f"({len(request.garment_assets)} garment images)"
            )
            response = await self.client.aio.models.generate_content(
                model=self.config.model,
                contents=parts,
                config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
            )
            outcome = payload_codec.decode(response, request.outfit_identity)
        except Exception as e:
            logger.error(f"Try-on generation failed for outfit {request.outfit_identity}: {e}")
            return GenerationOutcome.failure(
                request.outfit_identity, str(e) or DEFAULT_FAILURE_MESSAGE
            )

        if outcome.failure_reason:
            logger.error(
                f"Try-on generation failed for outfit {request.outfit_identity}: "
                f"{outcome.failure_reason}"
            )
            return outcome

        logger.info(
            f"Outfit {request.outfit_identity} generated "
            f"({'image' if outcome.rendered_image else 'text only'})"
        )
        return outcome

    async def close(self):
        """Close the underlying async transport."""
        if self._client is not None:
            await self._client.aio.aclose()
            self._client = None
