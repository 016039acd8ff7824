"""FastAPI application factory.

Run with:
    picklink serve
or:
    uvicorn picklink.api.app:create_app --factory
"""

import logging

from fastapi import FastAPI

from picklink import __version__
from picklink.api.routes import events, picks
from picklink.services import PickLinker, create_pick_linker

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def create_app(linker: PickLinker | None = None) -> FastAPI:
    """Create the API app.

    Args:
        linker: Pipeline to serve (default: built from environment settings)
    """
    app = FastAPI(title="picklink", version=__version__)
    app.state.linker = linker or create_pick_linker()

    app.include_router(picks.router, prefix=API_PREFIX, tags=["picks"])
    app.include_router(events.router, prefix=API_PREFIX, tags=["events"])

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "ok",
            "providers": app.state.linker.feed.provider_names,
        }

    logger.info("[API] Providers: %s", ", ".join(app.state.linker.feed.provider_names))
    return app
