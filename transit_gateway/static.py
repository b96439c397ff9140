"""
Static asset serving.

In production assets are cached by clients for STATIC_MAX_AGE_SECS; in
development every asset is revalidated.
"""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from transit_gateway.core.config import Settings

logger = logging.getLogger(__name__)


def cache_control(config: Settings) -> str:
    if config.is_production:
        return f"public, max-age={config.STATIC_MAX_AGE_SECS}"
    return "no-cache"


class CachedStaticFiles(StaticFiles):
    """StaticFiles that stamps every file response with a Cache-Control header."""

    def __init__(self, *args, cache_control: str = "no-cache", **kwargs):
        super().__init__(*args, **kwargs)
        self.cache_control = cache_control

    def file_response(self, *args, **kwargs):
        response = super().file_response(*args, **kwargs)
        response.headers["Cache-Control"] = self.cache_control
        return response


def mount_static(app: FastAPI, config: Settings) -> bool:
    """
    Serve the static root at "/" if it exists. Must be called after the
    API routes are included so they take precedence.
    """
    static_dir = Path(config.STATIC_DIR)
    if not static_dir.is_dir():
        logger.info("No static directory at %s, not serving assets", static_dir)
        return False

    app.mount(
        "/",
        CachedStaticFiles(
            directory=str(static_dir), html=True, cache_control=cache_control(config)
        ),
        name="static",
    )
    return True
