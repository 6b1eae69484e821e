"""API error translation: domain errors to HTTP, failing map reads to empty lists."""

import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import Request
from fastapi.responses import JSONResponse

from app.domain.exceptions import ConflictError, DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})
    if isinstance(exc, ConflictError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=400, content={"detail": exc.errors})
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def read_or_empty(what: str, read: Awaitable[list[T]]) -> list[T]:
    """Await a map read; a failing backend yields an empty list instead of a 500."""
    try:
        return await read
    except Exception:
        logger.exception("Could not load %s, showing none", what)
        return []
