"""FastAPI application hosting the SLPK middleware."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from slpkserver import __version__
from slpkserver.config import AppConfig, CorsOptions
from slpkserver.web.middleware import SlpkMiddleware

LOGGER = logging.getLogger(__name__)

HEALTH_PATH = "/healthz"


def _add_cors(app: FastAPI, cors: CorsOptions) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors.origins),
        allow_methods=list(cors.methods),
        allow_headers=list(cors.headers),
        expose_headers=list(cors.exposed_headers),
        allow_credentials=cors.supports_credentials,
    )


def _mount_web_root(app: FastAPI, web_root: Path | None) -> None:
    if web_root is None:
        return
    if not Path(web_root).is_dir():
        LOGGER.debug("Web root %s not found, static fallback disabled", web_root)
        return
    app.mount("/", StaticFiles(directory=web_root), name="static")


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the web application for ``config``.

    Middleware order, outermost first: CORS, SLPK assets, then the routes and
    the static fallback over ``config.web_root``. The health route stays
    reachable even when an empty ``path_base`` maps every other path.
    """
    config = config or AppConfig()
    app = FastAPI(title="SLPK Server", version=__version__)

    @app.get(HEALTH_PATH)
    async def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "path_base": config.slpk.path_base,
            "root_folder": str(config.slpk.root_folder),
        }

    _mount_web_root(app, config.web_root)
    # add_middleware wraps, so the last one added runs first.
    app.add_middleware(SlpkMiddleware, options=config.slpk, passthrough=(HEALTH_PATH,))
    _add_cors(app, config.cors)
    return app
