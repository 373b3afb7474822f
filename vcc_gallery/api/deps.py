# vcc_gallery/api/deps.py
from pathlib import Path

from fastapi import HTTPException, Request

from vcc_gallery.core.config import Settings
from vcc_gallery.utils.http import safe_rel_under


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def resolve_under_root(settings: Settings, path: str) -> Path:
    """Absolute path for a request path under the media root, or 403."""
    abs_path = (settings.media_root / path).resolve()
    if safe_rel_under(settings.media_root, abs_path) is None:
        raise HTTPException(status_code=403, detail="forbidden path")
    return abs_path
