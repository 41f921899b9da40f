"""Description: Thumbnail image generation using Gemini native image output."""

import logging
import os
import time
from typing import Any

from google import genai

from services.gemini.media_inputs import build_contents
from services.gemini.prompts import build_generation_prompt
from services.gemini.response_parser import GenerationOutput, extract_parts, fold_parts

LOGGER = logging.getLogger(__name__)
IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image-preview")


class ThumbnailImageGenerator:
    """Send the source image and instruction to the image model and fold the reply."""

    def __init__(self, client: genai.Client, model: str = IMAGE_MODEL) -> None:
        if client is None:
            raise ValueError("Gemini client must be provided.")
        self.client = client
        self.model = model

    async def generate(self, user_prompt: str, image_bytes: bytes) -> GenerationOutput:
        """Generate a thumbnail for `image_bytes` guided by the raw user prompt.

        Returns:
            The concatenated narrative text and the first returned image, if any.

        Raises:
            RuntimeError: If the response carries no candidate parts.
        """
        start_time = time.time()
        contents = build_contents(build_generation_prompt(user_prompt), image_bytes)
        response = await self._create_response(contents)
        LOGGER.info("Thumbnail generation latency: %.3fs", time.time() - start_time)

        try:
            parts = extract_parts(response)
        except Exception as exc:
            LOGGER.error("Error parsing Gemini response: %s", exc)
            LOGGER.error("Full response object: %r", response)
            raise

        output = fold_parts(parts)
        if output.image is None:
            LOGGER.info("Gemini returned no image part for this request.")
        return output

    async def _create_response(self, contents: Any) -> Any:
        try:
            return await self.client.aio.models.generate_content(model=self.model, contents=contents)
        except Exception as exc:
            LOGGER.error("Error during Gemini image generation call: %s", exc)
            raise
