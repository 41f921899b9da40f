"""Helpers to parse generate_content outputs into typed parts."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, List, Optional, Union


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class ImagePart:
    data: bytes
    mime_type: Optional[str] = None


ResponsePart = Union[TextPart, ImagePart]


@dataclass(frozen=True)
class GenerationOutput:
    """Folded view of a generation response."""

    text: str
    image: Optional[ImagePart]


def extract_parts(response: Any) -> List[ResponsePart]:
    """Return the typed parts of the first candidate.

    Raises:
        RuntimeError: If the response has no candidate content parts.
    """
    candidates = getattr(response, "candidates", None)
    content = getattr(candidates[0], "content", None) if candidates else None
    raw_parts = getattr(content, "parts", None) if content is not None else None
    if not raw_parts:
        raise RuntimeError("Invalid response from Gemini API")

    parts: List[ResponsePart] = []
    for raw in raw_parts:
        text = getattr(raw, "text", None)
        inline = getattr(raw, "inline_data", None)
        if text:
            parts.append(TextPart(text=text))
        elif inline is not None and getattr(inline, "data", None):
            data = inline.data
            # Older payloads carry base64 text rather than raw bytes.
            if isinstance(data, str):
                data = base64.b64decode(data)
            parts.append(ImagePart(data=data, mime_type=getattr(inline, "mime_type", None)))
    return parts


def fold_parts(parts: List[ResponsePart]) -> GenerationOutput:
    """Concatenate text parts in order and keep the first image part."""
    text_chunks: List[str] = []
    image: Optional[ImagePart] = None
    for part in parts:
        if isinstance(part, TextPart):
            text_chunks.append(part.text)
        elif isinstance(part, ImagePart) and image is None:
            image = part
    return GenerationOutput(text="".join(text_chunks), image=image)
