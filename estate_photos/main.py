from __future__ import annotations
import logging

from fastapi import FastAPI

from estate_photos.core.config import settings, configure_cors
from estate_photos.core.exceptions import register_exception_handlers
from estate_photos.core.logging import setup_logging
from estate_photos.db.session import init_models

# Routers (import once, include once)
from estate_photos.api.v1.health import router as health_router
from estate_photos.api.v1.photos import router as photos_router
from estate_photos.api.v1.properties import router as properties_router

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
configure_cors(app)

# Global exception handlers
register_exception_handlers(app)


@app.on_event("startup")
def on_startup():
    """
    - Configure logging
    - Create tables
    """
    setup_logging(settings.log_level)
    init_models()
    logger.info("serving photos from %s", settings.storage_root)


app.include_router(health_router)
app.include_router(photos_router)
app.include_router(properties_router)


@app.middleware("http")
async def _log_requests(request, call_next):
    response = await call_next(request)
    logger.debug("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response
