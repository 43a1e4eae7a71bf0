"""Groupie tracker API layer -- routes, schemas and middleware."""

from groupie_tracker.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from groupie_tracker.api.routes import router
from groupie_tracker.api.schemas import (
    CatalogListResponse,
    ErrorResponse,
    HealthResponse,
    MemberRangeResponse,
    YearRangeResponse,
)

__all__ = [
    "CatalogListResponse",
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "HealthResponse",
    "MemberRangeResponse",
    "RequestLoggingMiddleware",
    "YearRangeResponse",
    "configure_cors",
    "router",
]
