import inspect
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from google import genai

from routes.generate_route import router as generate_router
from routes.uploads_route import router as uploads_router
from utils.upload_dir import UploadDirectory

load_dotenv()  # Load environment variables from .env file if present

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - the upload directory (created if missing)
      - the Gemini client, unless one was injected by `create_app`
    and attach them to `app.state`.
    """
    app.state.upload_dir.ensure()

    owns_client = False
    if getattr(app.state, "genai_client", None) is None:
        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise RuntimeError("GEMINI_API_KEY environment variable is not set")
        try:
            app.state.genai_client = genai.Client(api_key=api_key)
        except Exception as exc:
            raise RuntimeError("Failed to initialize Gemini client") from exc
        owns_client = True

    try:
        yield
    finally:
        client = getattr(app.state, "genai_client", None)
        if owns_client and client is not None:
            aio = getattr(client, "aio", None)
            aclose = getattr(aio, "aclose", None) or getattr(client, "close", None)
            if aclose is not None:
                try:
                    result = aclose()
                    if inspect.isawaitable(result):
                        await result
                except Exception as exc:
                    # Shutdown errors must not mask the original exit path.
                    LOGGER.warning("Error closing Gemini client: %s", exc)


def create_app(
    genai_client: Optional[Any] = None,
    upload_dir: Optional[UploadDirectory] = None,
    app_url: Optional[str] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Shared resources may be injected (tests do this); otherwise they are
    built from the environment.
    """
    app = FastAPI(lifespan=lifespan)
    app.state.genai_client = genai_client
    app.state.upload_dir = upload_dir or UploadDirectory()
    app.state.app_url = app_url if app_url is not None else os.getenv("APP_URL", "")

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Render every HTTP error as `{"error": <detail>}`."""
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed form bodies are client errors, reported like the manual checks."""
        LOGGER.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check that verifies the Gemini client and upload directory are attached.
        """
        has_genai = getattr(request.app.state, "genai_client", None) is not None
        upload_dir = getattr(request.app.state, "upload_dir", None)
        return {
            "ok": True,
            "genai_available": has_genai,
            "upload_dir_ready": upload_dir is not None and upload_dir.root.is_dir(),
        }

    # Register application routers
    app.include_router(generate_router)
    app.include_router(uploads_router)

    return app


app = create_app()
