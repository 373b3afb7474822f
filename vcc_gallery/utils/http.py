# vcc_gallery/utils/http.py
from pathlib import Path
from typing import Optional
import urllib.parse

from vcc_gallery.core.config import VIDEO_EXT


def safe_rel_under(base: Path, target: Path) -> Optional[Path]:
    """
    Return target's path relative to base if target is inside base, else None.
    Prevents path traversal.
    """
    try:
        return target.resolve().relative_to(base.resolve())
    except (OSError, ValueError):
        return None


def media_url(rel_path: str) -> str:
    """URL path serving the raw file at rel_path (posix, relative to the media root)."""
    return "/" + urllib.parse.quote(rel_path)


def thumb_url(rel_path: str, ext: str, h: int) -> str:
    """Thumbnail URL for images; videos are shown from the raw file."""
    if ext in VIDEO_EXT:
        return media_url(rel_path)
    return f"/_thumb/{urllib.parse.quote(rel_path)}?h={h}"
