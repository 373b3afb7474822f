# vcc_gallery/api/routes/media.py
# Raw files and thumbnails from the media root:
# - GET /_thumb/{path}?h=220
# - GET /{path}
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from vcc_gallery.api.deps import get_settings, resolve_under_root
from vcc_gallery.core.config import Settings
from vcc_gallery.services.scanner import is_media_file
from vcc_gallery.utils.thumbs import serve_thumb

public_router = APIRouter(tags=["media"])


def serve_media(settings: Settings, path: str) -> FileResponse:
    """Serve the original file; content type is inferred from the extension."""
    abs_path = resolve_under_root(settings, path)
    if not abs_path.is_file():
        raise HTTPException(status_code=404, detail="file not found")
    return FileResponse(abs_path)


@public_router.get("/_thumb/{path:path}")
def get_thumb(path: str, h: int = 220, settings: Settings = Depends(get_settings)):
    if not (16 <= h <= 2000):
        raise HTTPException(400, "h must be 16..2000")
    abs_path = resolve_under_root(settings, path)
    if not abs_path.is_file() or not is_media_file(abs_path.name):
        raise HTTPException(status_code=404, detail="file not found")
    return serve_thumb(abs_path, h)


@public_router.get("/{path:path}")
def get_media(path: str, settings: Settings = Depends(get_settings)):
    return serve_media(settings, path)
