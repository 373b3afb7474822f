# vcc_gallery/main.py: only app wiring, no endpoints here.
from typing import Optional

from fastapi import FastAPI

from vcc_gallery.api.routes import gallery, media
from vcc_gallery.core.config import Settings, load_settings


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title=settings.title, version="0.1")
    app.state.settings = settings

    # API routers
    app.include_router(gallery.api_router, prefix="/api")

    # public routers; order matters: "/{name}" before the "/{path:path}" file catch-all
    app.include_router(gallery.public_router)
    app.include_router(media.public_router)
    return app
