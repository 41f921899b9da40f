"""FastAPI routes for thumbnail generation."""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse

from controllers.thumbnail_controller import generate_thumbnail

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["generate"])


@router.post("/generate", summary="Generate a thumbnail from an uploaded image")
async def post_generate(
	request: Request,
	image: Optional[UploadFile] = File(None),
	prompt: Optional[str] = Form(None),
	previous_image: Optional[str] = Form(None, alias="previousImage"),
	previous_image1: Optional[str] = Form(None, alias="previousImage1"),
	previous_image2: Optional[str] = Form(None, alias="previousImage2"),
	previous_image3: Optional[str] = Form(None, alias="previousImage3"),
):
	"""Validate the upload, run both Gemini calls and return the generation summary."""
	try:
		return await generate_thumbnail(
			request,
			image,
			prompt,
			(previous_image, previous_image1, previous_image2, previous_image3),
		)
	except HTTPException:
		raise
	except Exception as exc:  # pylint: disable=broad-exception-caught
		LOGGER.exception("Error processing request: %s", exc)
		raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.get("/generate", include_in_schema=False)
async def get_generate():
	return JSONResponse(status_code=400, content={"message": "This endpoint only accepts POST requests"})
