"""Utilities to build multimodal contents for the Gemini generate_content API."""

import io
import logging
from typing import List

from google.genai import types
from PIL import Image, UnidentifiedImageError

LOGGER = logging.getLogger(__name__)
DEFAULT_INLINE_MIME = "image/png"


def detect_mime_type(image_bytes: bytes) -> str:
    """Return the MIME type Pillow recognises for the bytes, or image/png."""
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            mime = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError) as exc:
        LOGGER.debug("Could not identify inline image, defaulting to %s: %s", DEFAULT_INLINE_MIME, exc)
        return DEFAULT_INLINE_MIME
    return mime or DEFAULT_INLINE_MIME


def build_contents(prompt_text: str, image_bytes: bytes) -> List[types.Part]:
    """Compose the instruction text followed by the source image as inline data."""
    return [
        types.Part.from_text(text=prompt_text),
        types.Part.from_bytes(data=image_bytes, mime_type=detect_mime_type(image_bytes)),
    ]
