import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware

from transit_gateway.api.api import api_router
from transit_gateway.core.config import settings
from transit_gateway.services.router_client import router_client
from transit_gateway.static import mount_static
from transit_gateway.utils import logger as _  # noqa: F401 - Import to configure logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s version v%s", settings.PROJECT_NAME, settings.VERSION)
    logger.info("Production mode" if settings.is_production else "Dev mode")
    logger.info("Using routing server at %s", router_client.base_url)
    try:
        yield
    finally:
        await router_client.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status and duration."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s %d %.1f ms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


app.include_router(api_router)

mount_static(app, settings)
