import asyncio
import logging

from fastapi import HTTPException, Request
from fastapi.responses import Response

from utils.upload_dir import UploadDirectory

LOGGER = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=31536000"
_CONTENT_TYPES = {
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}


def content_type_for(filename: str) -> str:
    """Infer the served content type from the file extension; jpeg by default."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return _CONTENT_TYPES.get(ext, "image/jpeg")


async def serve_upload(request: Request, filename: str) -> Response:
    """Controller to fetch a saved image by its path relative to the upload directory.

    Raises:
        HTTPException(404) if the file does not exist (or lies outside the directory).
        HTTPException(500) if the file cannot be read.
    """
    directory: UploadDirectory = request.app.state.upload_dir
    if not await asyncio.to_thread(directory.exists, filename):
        raise HTTPException(status_code=404, detail="File not found")

    try:
        data = await asyncio.to_thread(directory.read_bytes, filename)
    except Exception as exc:
        LOGGER.error("Error serving image %s: %s", filename, exc)
        raise HTTPException(status_code=500, detail="Failed to serve image") from exc

    return Response(
        content=data,
        media_type=content_type_for(filename),
        headers={"Cache-Control": CACHE_CONTROL},
    )
