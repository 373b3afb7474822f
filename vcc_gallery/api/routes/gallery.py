# vcc_gallery/api/routes/gallery.py
# Gallery pages:
# - GET /                      → root gallery (folders + root files)
# - GET /{name}                → folder gallery, or the root-level file itself
# - GET /api/gallery           → root page model as JSON
# - GET /api/gallery/{name}    → folder page model as JSON
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from vcc_gallery.api.deps import get_settings, resolve_under_root
from vcc_gallery.api.routes.media import serve_media
from vcc_gallery.core.config import Settings
from vcc_gallery.core.errors import GalleryError
from vcc_gallery.schemas.media import GalleryPage
from vcc_gallery.services.gallery import build_folder_gallery, build_root_gallery
from vcc_gallery.services.render import render_page

log = logging.getLogger(__name__)

api_router = APIRouter(prefix="/gallery", tags=["gallery"])   # mounted under /api in main
public_router = APIRouter(tags=["gallery-public"])            # mounted without prefix in main

GALLERY_ERROR = "An error occurred while building the gallery."


async def _root_page(settings: Settings) -> GalleryPage:
    try:
        return await build_root_gallery(settings)
    except GalleryError:
        log.exception("error building the root gallery")
        raise HTTPException(status_code=500, detail=GALLERY_ERROR)


async def _folder_page(settings: Settings, name: str) -> GalleryPage:
    abs_dir = resolve_under_root(settings, name)
    if not abs_dir.is_dir() or abs_dir == settings.media_root.resolve():
        raise HTTPException(status_code=404, detail="folder not found")
    try:
        return await build_folder_gallery(settings, name)
    except GalleryError:
        log.exception(f"error building gallery for folder {name!r}")
        raise HTTPException(status_code=500, detail=GALLERY_ERROR)


# ===========================
# ========== API ============
# ===========================

@api_router.get("", response_model=GalleryPage)
async def api_root_gallery(settings: Settings = Depends(get_settings)):
    return await _root_page(settings)


@api_router.get("/{name}", response_model=GalleryPage)
async def api_folder_gallery(name: str, settings: Settings = Depends(get_settings)):
    return await _folder_page(settings, name)


# ==============================
# ========= HTML PAGES =========
# ==============================

@public_router.get("/", response_class=HTMLResponse)
async def root_gallery(settings: Settings = Depends(get_settings)):
    page = await _root_page(settings)
    return HTMLResponse(render_page(settings, page))


@public_router.get("/{name}")
async def folder_gallery(name: str, settings: Settings = Depends(get_settings)):
    """A subdirectory of the media root gets a page; anything else is served as a file."""
    abs_path = resolve_under_root(settings, name)
    if not abs_path.is_dir():
        return serve_media(settings, name)
    page = await _folder_page(settings, name)
    return HTMLResponse(render_page(settings, page))
