import asyncio
import logging
from typing import Any, Dict, Optional, Sequence

from fastapi import HTTPException, Request, UploadFile

from models.generation_result import GenerationResult
from services.fallback_resolver import resolve_fallback
from services.gemini.image_generator import ThumbnailImageGenerator
from services.gemini.prompt_enhancer import PromptEnhancer
from services.image_store import ImageStore, reserve_names
from utils.media_validation import ensure_upload_fields, read_image_bytes
from utils.upload_dir import UploadDirectory

LOGGER = logging.getLogger(__name__)


def _uploads_url(base_url: str, filename: str) -> str:
    return f"{base_url.rstrip('/')}/uploads/{filename}"


async def generate_thumbnail(
    request: Request,
    image: Optional[UploadFile],
    prompt: Optional[str],
    previous_images: Sequence[Optional[str]] = (),
) -> Dict[str, Any]:
    """Handle an upload, run prompt enhancement and image generation, persist the output.

    Args:
        request: FastAPI Request object (used to access app.state for shared clients).
        image: Uploaded source image.
        prompt: The user's raw prompt.
        previous_images: Candidate filenames of earlier generated images, highest priority first.

    Returns:
        The JSON body for a successful request. A request where the model returned no
        image is still successful; `geminiImagePath` is None in that case.

    Raises:
        HTTPException(400) on validation failures, HTTPException(500) if the upload cannot be saved.
    """
    prompt = ensure_upload_fields(image, prompt)
    image_bytes = await read_image_bytes(image)

    # Acquire shared resources from app.state
    directory: UploadDirectory = request.app.state.upload_dir
    genai_client = request.app.state.genai_client
    base_url: str = getattr(request.app.state, "app_url", "") or ""

    store = ImageStore(directory)
    await store.prepare()

    names = reserve_names(image.filename)

    used_previous_image = await asyncio.to_thread(resolve_fallback, previous_images, directory.exists)
    source_bytes = image_bytes
    if used_previous_image:
        LOGGER.info("Using previous image as generation input: %s", used_previous_image)
        source_bytes = await store.load(used_previous_image)
    else:
        LOGGER.info("No previous images available for fallback")

    try:
        upload_path = await store.save(names.upload, image_bytes)
    except Exception as exc:
        LOGGER.error("Error saving image: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to save image") from exc
    LOGGER.info("Image saved successfully: %s", upload_path)

    # Services
    enhancer = PromptEnhancer(genai_client)
    generator = ThumbnailImageGenerator(genai_client)

    # The enhanced prompt is logged only; generation embeds the raw prompt.
    enhancement = await enhancer.enhance(prompt)
    LOGGER.debug("Enhanced prompt: %s", enhancement["enhanced_prompt"])

    output = await generator.generate(prompt, source_bytes)

    result = GenerationResult(
        uploaded_image_url=f"/uploads/{names.upload}",
        uploaded_image_path=str(upload_path),
        used_previous_image=used_previous_image,
        response_prompt_data=output.text,
    )
    if output.image is not None:
        generated_path = await store.save(names.generated, output.image.data)
        LOGGER.info("Generated image saved: %s", generated_path)
        result.gemini_image_path = names.generated
        result.gemini_image_url = _uploads_url(base_url, names.generated)

    LOGGER.info(
        "Processed thumbnail request: file=%s size=%d type=%s previous=%s used=%s generated=%s",
        image.filename,
        len(image_bytes),
        image.content_type,
        [name for name in previous_images if name] or None,
        used_previous_image,
        result.gemini_image_path,
    )
    return result.to_response()
