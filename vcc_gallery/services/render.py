# vcc_gallery/services/render.py
from __future__ import annotations
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from vcc_gallery.core.config import Settings
from vcc_gallery.schemas.media import GalleryPage

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_page(settings: Settings, page: GalleryPage) -> str:
    """Complete HTML document for a gallery page; the navigation list is inlined as JSON."""
    return _env.get_template("gallery.html").render(
        title=settings.title,
        author=settings.author,
        view=page.view,
        folder=page.folder,
        items=page.items,
        media=[m.model_dump() for m in page.media],
    )
