"""Map registry errors to HTTP responses.

  ValidationError   -> 422  (same status FastAPI uses for malformed bodies)
  NotFoundError     -> 404
  InvalidStateError -> 409  (request conflicts with the credential's state)

Body: ``{"detail": <message>, "kind": <code>, "context": {...}}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from credregistry.core.errors import (
    InvalidStateError,
    NotFoundError,
    RegistryError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[RegistryError], int], ...] = (
    (ValidationError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidStateError, status.HTTP_409_CONFLICT),
)


def status_for(exc: RegistryError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
        code = status_for(exc)
        logger.info(
            "%s %s rejected: %s (%s)",
            request.method,
            request.url.path,
            exc.kind,
            exc.message,
        )
        return JSONResponse(status_code=code, content=exc.to_response())
