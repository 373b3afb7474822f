# vcc_gallery/services/metadata.py
# Reads the handful of embedded tags used for captions.
# Pillow exposes EXIF (IFD0 + Exif sub-IFD) and, for JPEG, the IPTC block.
from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import logging

from PIL import Image, ExifTags, IptcImagePlugin

log = logging.getLogger(__name__)

_EXIF_IFD = 0x8769           # Exif sub-IFD pointer
_IPTC_OBJECT_NAME = (2, 5)   # IPTC Application Record 2:05

CAPTION_TAGS = ("ImageDescription", "Title", "ObjectName")


def _to_text(v, *, encoding: str = "utf-8") -> str:
    """EXIF strings come back as str, bytes, or (for XP* tags) a tuple of ints."""
    if v is None:
        return ""
    if isinstance(v, (list, tuple)):
        if v and all(isinstance(x, int) for x in v):
            v = bytes(v)
        else:
            v = v[0] if v else ""
    if isinstance(v, bytes):
        v = v.decode(encoding, errors="ignore")
    return str(v).replace("\x00", "").strip()


def exif_datetime_to_epoch(v) -> Optional[int]:
    """'YYYY:MM:DD HH:MM:SS' -> Unix seconds, read as UTC. Ints pass through."""
    if isinstance(v, (int, float)):
        return int(v)
    s = _to_text(v)
    if not s:
        return None
    try:
        dt = datetime.strptime(s[:19], "%Y:%m:%d %H:%M:%S")
    except ValueError:
        return None
    return int(dt.replace(tzinfo=timezone.utc).timestamp())


def _via_pillow(p: Path) -> dict:
    """Flat {tag name: raw value} for IFD0, the Exif sub-IFD and IPTC ObjectName."""
    out: dict = {}
    tagmap = ExifTags.TAGS
    with Image.open(p) as im:
        exif = im.getexif()
        for tag_id, val in exif.items():
            out[tagmap.get(tag_id, tag_id)] = val
        for tag_id, val in exif.get_ifd(_EXIF_IFD).items():
            out.setdefault(tagmap.get(tag_id, tag_id), val)
        iptc = IptcImagePlugin.getiptcinfo(im) or {}
        if _IPTC_OBJECT_NAME in iptc:
            out["ObjectName"] = iptc[_IPTC_OBJECT_NAME]
    return out


def read_caption_tags(p: Path) -> Optional[dict]:
    """
    Return the caption-relevant tags, or None when the file cannot be parsed.
    Keys: ImageDescription, Title, ObjectName, Model (str, possibly empty)
          DateTimeOriginal (Unix seconds or None)
    """
    try:
        raw = _via_pillow(p)
    except Exception as e:  # Pillow raises a wide range of decoder errors
        log.debug(f"no metadata for {p}: {e}")
        return None
    return {
        "ImageDescription": _to_text(raw.get("ImageDescription")),
        "Title": _to_text(raw.get("XPTitle"), encoding="utf-16-le"),
        "ObjectName": _to_text(raw.get("ObjectName")),
        "DateTimeOriginal": exif_datetime_to_epoch(raw.get("DateTimeOriginal")),
        "Model": _to_text(raw.get("Model")),
    }
