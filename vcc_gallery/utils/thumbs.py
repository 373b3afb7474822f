# vcc_gallery/utils/thumbs.py
# Thumbnails are rendered in memory for every request; nothing is written to disk.
from pathlib import Path
import io
import logging

from PIL import Image, ImageOps
from fastapi.responses import FileResponse, Response

from vcc_gallery.core.config import VIDEO_EXT

log = logging.getLogger(__name__)


def make_thumb_bytes(abs_path: Path, h: int) -> bytes:
    """Load an image and return a JPEG of at most height h (never upscaled), EXIF-rotated."""
    with Image.open(abs_path) as im:
        im = ImageOps.exif_transpose(im).convert("RGB")
        w, hh = im.size
        if hh > h:
            new_w = max(int(w * h / hh), 1)
            im = im.resize((new_w, h))
        buf = io.BytesIO()
        im.save(buf, format="JPEG", quality=82)
        return buf.getvalue()


def serve_thumb(abs_path: Path, h: int):
    """
    Serve a downscaled JPEG for images.
    Videos, and images Pillow cannot decode, fall back to the original file.
    """
    if abs_path.suffix.lower() in VIDEO_EXT:
        return FileResponse(abs_path)
    try:
        return Response(make_thumb_bytes(abs_path, h), media_type="image/jpeg")
    except (OSError, ValueError) as e:
        log.debug(f"thumbnail failed for {abs_path}: {e}")
        return FileResponse(abs_path)
