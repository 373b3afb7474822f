# vcc_gallery/services/captions.py
# Caption chain for one media file (first match wins):
#   1) JPEG metadata: ImageDescription -> Title -> ObjectName
#   2) DateTimeOriginal as "Month D, YYYY"
#   3) camera Model
#   4) "Video" for video files, else the filename with -/_ turned into spaces
from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import re

from vcc_gallery.core.config import JPEG_EXT, VIDEO_EXT
from vcc_gallery.services.metadata import CAPTION_TAGS, read_caption_tags

_SEPARATORS = re.compile(r"[-_]+")


def humanize_name(name: str) -> str:
    """'summer_trip--2024' -> 'summer trip 2024'"""
    return _SEPARATORS.sub(" ", name).strip()


def filename_caption(filename: str) -> str:
    caption = humanize_name(Path(filename).stem)
    return caption or filename


def format_long_date(ts: int) -> str:
    """Unix seconds -> 'March 15, 2024' (UTC)."""
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return f"{dt.strftime('%B')} {dt.day}, {dt.year}"


def caption_from_tags(tags: Optional[dict], filename: str, ext: str) -> str:
    """Apply the caption chain to already-read tags (None = no metadata)."""
    if tags:
        for key in CAPTION_TAGS:
            value = (tags.get(key) or "").strip()
            if value:
                return value
        if tags.get("DateTimeOriginal"):
            return format_long_date(tags["DateTimeOriginal"])
        model = (tags.get("Model") or "").strip()
        if model:
            return model

    if ext in VIDEO_EXT:
        return "Video"
    return filename_caption(filename)


def resolve_caption(path: Path, ext: str) -> str:
    tags = read_caption_tags(path) if ext in JPEG_EXT else None
    return caption_from_tags(tags, path.name, ext)
