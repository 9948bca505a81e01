"""Translate domain exceptions into HTTP responses.

Every failure leaves as ``{"success": false, "message": ...}``. Unexpected
exceptions become a bare 500: the traceback goes to the log, never to the
client.
"""

from __future__ import annotations

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    EmptyCartError,
    EntityNotFoundError,
    Forbidden,
    OutOfStockError,
    StorageUnavailable,
    Unauthenticated,
    ValidationError,
)

logger = structlog.get_logger(__name__)

_STATUS_CODES: tuple[tuple[type[DomainException], int], ...] = (
    (Unauthenticated, 401),
    (Forbidden, 403),
    (EntityNotFoundError, 404),
    (EmptyCartError, 400),
    (ValidationError, 400),
    (OutOfStockError, 409),
    (ConflictError, 409),
    (StorageUnavailable, 503),
)


def status_for(exc: DomainException) -> int:
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "message": message}
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "request_failed",
        method=request.method,
        path=request.url.path,
        status=status_code,
        error=type(exc).__name__,
        reason=str(exc),
    )
    if status_code == 500:
        return _failure(500, "Internal server error")
    return _failure(status_code, str(exc))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()))
    message = f"{where}: {first.get('msg', 'invalid request')}" if where else "Invalid request"
    return _failure(422, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_error", method=request.method, path=request.url.path
    )
    return _failure(500, "Internal server error")
