"""Validation helpers for uploaded images."""

from typing import Optional

from fastapi import HTTPException, UploadFile

MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def is_image_content_type(content_type: Optional[str]) -> bool:
    """Return True when the declared MIME type is an image type."""
    return bool(content_type) and content_type.lower().startswith("image/")


def ensure_upload_fields(image: Optional[UploadFile], prompt: Optional[str]) -> str:
    """Check that both the image and a non-blank prompt were supplied.

    Returns the prompt unchanged so callers keep the user's exact text.
    """
    if image is None or not prompt or not prompt.strip():
        raise HTTPException(status_code=400, detail="Image and prompt are required")
    return prompt


async def read_image_bytes(image: UploadFile, max_bytes: int = MAX_UPLOAD_BYTES) -> bytes:
    """Validate the declared type and size of an uploaded image and return its bytes.

    The MIME type is checked before the body is read. An image of exactly
    `max_bytes` is accepted; one byte more is rejected.
    """
    if not is_image_content_type(image.content_type):
        raise HTTPException(status_code=400, detail="Invalid file type. Please upload an image.")

    # Read one byte past the limit so oversized uploads are detected without
    # buffering the whole body.
    data = await image.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail="File size too large. Please upload an image under 10MB.",
        )
    return data
