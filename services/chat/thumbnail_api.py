"""
HTTP client for the thumbnail generation endpoint.

Posts the multipart form the server expects and collapses every failure
(network error, non-2xx status, unreadable body) into `ThumbnailApiError`;
the chat client does not distinguish between them.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from models.chat_models import SelectedFile

LOGGER = logging.getLogger(__name__)
GENERATE_PATH = "/generate"


class ThumbnailApiError(Exception):
    """Raised when a generation request does not yield a usable response."""


class ThumbnailApiClient:
    """
    Async client for POST /generate.

    Args:
        base_url: Server base URL (e.g., "http://localhost:8000")
        timeout: Request timeout in seconds; None waits indefinitely
        transport: Optional httpx transport (tests mount the app in-process)
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def generate(
        self,
        prompt: str,
        image: Optional[SelectedFile] = None,
        previous_images: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Send a generation request.

        Args:
            prompt: The user's prompt text
            image: Freshly selected image, if any
            previous_images: previousImage / previousImage1..3 form fields

        Returns:
            Response JSON as dict

        Raises:
            ThumbnailApiError: On network, HTTP or decoding errors
        """
        data: Dict[str, str] = {"prompt": prompt}
        data.update(previous_images or {})
        files = None
        if image is not None:
            files = {"image": (image.filename, image.data, image.content_type)}

        try:
            response = await self.client.post(GENERATE_PATH, data=data, files=files)
        except httpx.RequestError as e:
            raise ThumbnailApiError(f"Request failed: {str(e)}") from e
        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Dict[str, Any]:
        if not response.is_success:
            detail = response.text
            LOGGER.error("Thumbnail request failed with HTTP %s: %s", response.status_code, detail)
            raise ThumbnailApiError(f"HTTP {response.status_code}: {detail}")
        try:
            payload = response.json()
        except ValueError as e:
            raise ThumbnailApiError(f"Invalid JSON response: {str(e)}") from e
        if not isinstance(payload, dict):
            raise ThumbnailApiError("Unexpected response shape")
        return payload

    async def close(self) -> None:
        await self.client.aclose()
