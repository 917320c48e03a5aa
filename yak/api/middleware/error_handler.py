"""
Global error handling for the FastAPI application.

Every failure leaves the API as the same ``ErrorResponse`` envelope
(``detail``, ``code``, ``timestamp``) so the UI can show one message shape.
"""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from yak.core.exceptions import YakError
from yak.core.models import ErrorResponse

logger = logging.getLogger(__name__)


def _envelope(status_code: int, detail: str, code: str, timestamp: str | None = None) -> JSONResponse:
    body = ErrorResponse(
        detail=detail,
        code=code,
        timestamp=timestamp or datetime.now(UTC).isoformat(),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    1. ``YakError`` - domain errors keep their own status code and code.
    2. ``RequestValidationError`` - malformed form/body (422).
    3. ``Exception`` - anything else becomes an opaque 500.
    """

    @app.exception_handler(YakError)
    async def yak_error_handler(request: Request, exc: YakError) -> JSONResponse:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.detail)
        return _envelope(exc.status_code, exc.detail, exc.code, exc.timestamp)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _envelope(422, str(exc), "VALIDATION_ERROR")

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        # Logged server-side only; the client never sees the traceback.
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return _envelope(500, "Internal server error", "INTERNAL_ERROR")
