"""Lifelog API layer: routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router, webhook_router
from src.api.schemas import (
    ErrorResponse,
    EventResponse,
    HealthResponse,
    LogEntryResponse,
    LogListResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "webhook_router",
    "ErrorResponse",
    "EventResponse",
    "HealthResponse",
    "LogEntryResponse",
    "LogListResponse",
]
