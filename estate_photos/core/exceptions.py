# estate_photos/core/exceptions.py
from __future__ import annotations
import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for photo catalog errors."""


class ValidationError(CatalogError):
    """A property or photo breaks a model invariant; nothing was written."""

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        msg = "; ".join(f"{field} {m}" for field, msgs in errors.items() for m in msgs)
        super().__init__(msg or "invalid record")


class NotFound(CatalogError):
    """Uniform not-found signal for the serving path."""


class ConflictError(CatalogError):
    """Concurrent writers collided on a per-property unique key."""


class StorageUnavailable(CatalogError):
    """Backing store or filesystem could not be reached."""


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("request validation failed: %s", exc.errors())
    return JSONResponse(status_code=HTTP_422_UNPROCESSABLE_ENTITY,
                        content={"detail": exc.errors()})


async def not_found_handler(request: Request, exc: NotFound):
    # empty body: callers must not learn which part of the lookup failed
    return Response(status_code=HTTP_404_NOT_FOUND)


async def storage_unavailable_handler(request: Request, exc: Exception):
    logger.error("storage unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=HTTP_503_SERVICE_UNAVAILABLE,
                        content={"detail": "Storage unavailable"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StorageUnavailable, storage_unavailable_handler)
    app.add_exception_handler(OperationalError, storage_unavailable_handler)
