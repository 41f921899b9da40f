"""Description: Prompt enhancement service using Gemini text completion."""

import logging
import os
import time
from typing import Any, Dict

from google import genai

from services.gemini.prompts import build_enhancement_prompt

LOGGER = logging.getLogger(__name__)
TEXT_MODEL = os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash")


class PromptEnhancer:
    """Rewrite a raw user prompt into a detailed thumbnail description."""

    def __init__(self, client: genai.Client, model: str = TEXT_MODEL) -> None:
        if client is None:
            raise ValueError("Gemini client must be provided.")
        self.client = client
        self.model = model

    async def enhance(self, user_prompt: str) -> Dict[str, Any]:
        """Return the enhanced prompt text and call latency."""
        start_time = time.time()
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=build_enhancement_prompt(user_prompt),
            )
        except Exception as exc:
            LOGGER.error("Error during Gemini prompt enhancement call: %s", exc)
            raise

        latency = time.time() - start_time
        enhanced = getattr(response, "text", None) or ""
        LOGGER.info("Prompt enhancement latency: %.3fs", latency)
        return {"enhanced_prompt": enhanced, "latency": latency}
