"""Serving of the bundled single page application.

Requests under the frontend route get the matching file from the built
frontend directory; anything else falls back to ``index.html`` so the
client-side router can handle deep links.
"""

from pathlib import Path

from fastapi import APIRouter, status
from fastapi.responses import FileResponse, PlainTextResponse, RedirectResponse
from loguru import logger

from shortl.core.config import settings

router = APIRouter(tags=["frontend"], include_in_schema=False)

MIME_TYPES = {
    ".ico": "image/x-icon",
    ".html": "text/html",
    ".js": "text/javascript",
    ".json": "application/json",
    ".css": "text/css",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".svg": "image/svg+xml",
    ".pdf": "application/pdf",
    ".doc": "application/msword",
}
DEFAULT_MIME_TYPE = "text/plain"

FRONTEND_MISSING_MESSAGE = (
    "The frontend files have not been found. Please contact the server admin."
)


def content_type_for(path: Path) -> str:
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_MIME_TYPE)


def frontend_response(asset_path: str = ""):
    """Build the response for a path below the frontend route."""
    root = Path(settings.FRONTEND_DIR).resolve()

    if asset_path:
        candidate = (root / asset_path).resolve()
        # Never serve anything outside the frontend directory
        if candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate, media_type=content_type_for(candidate))

    index = root / settings.FRONTEND_INDEX
    if not index.is_file():
        logger.error(f"Frontend index not found at {index}")
        return PlainTextResponse(FRONTEND_MISSING_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)
    return FileResponse(index, media_type="text/html")


@router.get("/")
async def redirect_to_frontend():
    return RedirectResponse(url=settings.FRONTEND_ROUTE, status_code=status.HTTP_302_FOUND)


@router.get(settings.FRONTEND_ROUTE)
async def serve_frontend_index():
    return frontend_response()


@router.get(settings.FRONTEND_ROUTE + "/{asset_path:path}")
async def serve_frontend_asset(asset_path: str):
    return frontend_response(asset_path)
