# vcc_gallery/services/covers.py
from __future__ import annotations
from pathlib import Path
from typing import List, Optional
import urllib.parse

from vcc_gallery.core.config import JPEG_EXT, VIDEO_EXT
from vcc_gallery.schemas.media import FolderItem
from vcc_gallery.services.captions import humanize_name
from vcc_gallery.services.metadata import read_caption_tags
from vcc_gallery.services.scanner import media_ext, scan_directory_safe
from vcc_gallery.utils.http import thumb_url

# Shown for folders without any media file.
PLACEHOLDER_ICON = (
    "data:image/svg+xml;charset=utf-8,"
    + urllib.parse.quote(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 64 64">'
        '<path fill="#9aa5b1" d="M6 14a4 4 0 0 1 4-4h14l6 6h24a4 4 0 0 1 4 4v30a4 4 0 0 1-4 4H10'
        'a4 4 0 0 1-4-4z"/></svg>'
    )
)


def pick_cover(files: List[str]) -> Optional[str]:
    """First file whose stem starts with 'cover' (any case), else the first file."""
    for name in files:
        if Path(name).stem.lower().startswith("cover"):
            return name
    return files[0] if files else None


def select_cover(abs_dir: Path, rel_dir: str, thumb_height: int,
                 root: Optional[Path] = None) -> FolderItem:
    """Folder tile: cover thumbnail + caption (folder name, or the cover's ImageDescription)."""
    name = Path(rel_dir).name
    caption = humanize_name(name) or name
    link = "/" + urllib.parse.quote(rel_dir)

    cover = pick_cover(scan_directory_safe(abs_dir, root).files)
    if cover is None:
        return FolderItem(name=name, caption=caption, thumbnail_url=PLACEHOLDER_ICON, link_path=link)

    ext = media_ext(cover)
    if ext in JPEG_EXT:
        tags = read_caption_tags(abs_dir / cover)
        if tags and tags["ImageDescription"]:
            caption = tags["ImageDescription"]

    return FolderItem(
        name=name,
        caption=caption,
        thumbnail_url=thumb_url(f"{rel_dir}/{cover}", ext, thumb_height),
        link_path=link,
        cover_is_video=ext in VIDEO_EXT,
    )
