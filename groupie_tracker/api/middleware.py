"""API middleware: CORS, request logging and error handling.

Starlette runs middleware last-added-first, so with the order used in
``main.create_app``:

    Client -> RequestLogging -> ErrorHandling -> route handler

RequestLoggingMiddleware therefore logs the final status code, including
the one ErrorHandlingMiddleware substituted.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from groupie_tracker.api.schemas import ErrorResponse
from groupie_tracker.utils.errors import GroupieTrackerError, NotFoundError
from groupie_tracker.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Allow the web client to call the API from another origin.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit origins.  Defaults to ``["*"]``; the API is read-only and
        unauthenticated.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=response.status_code if response else 500,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn escaped ``GroupieTrackerError`` subclasses into JSON errors.

    NotFoundError becomes a 404; anything else from the catalog is a 500.
    Details stay in the server log.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except GroupieTrackerError as exc:
            status_code = 404 if isinstance(exc, NotFoundError) else 500
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                source=exc.source_name,
                path=str(request.url.path),
                status=status_code,
            )
            body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
            return JSONResponse(status_code=status_code, content=body.model_dump())
