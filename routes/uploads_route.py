from fastapi import APIRouter, HTTPException, Request

from controllers.uploads_controller import serve_upload

router = APIRouter()


@router.get("/uploads/{filename:path}")
async def get_upload(request: Request, filename: str):
	"""Return the bytes of a previously saved image."""
	try:
		return await serve_upload(request, filename)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail="Failed to serve image") from exc
