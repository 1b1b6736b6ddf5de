"""FastAPI routes for lifelog.

Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern.

# Endpoint                      Method  Description
# ─────────────────────────────────────────────────────────────────
# /api/webhook/telegram         POST    Ingest one Telegram update
# /api/attachment/{id}          GET     Raw attachment bytes
# /api/v1/logs?query=           GET     List logs, or search them
# /api/v1/health                GET     Health check + integrations
"""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from src.api.schemas import ErrorResponse, HealthResponse, LogEntryResponse, LogListResponse
from src.interfaces.log_store import ILogStore
from src.models.telegram import TelegramUpdate
from src.pipeline.orchestrator import IngestionOrchestrator
from src.services.log_query_service import LogQueryService
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

# Telegram and the attachment links handed to the index live outside /api/v1.
webhook_router = APIRouter(prefix="/api")
router = APIRouter(prefix="/api/v1")

_JPEG_MAGIC = b"\xff\xd8\xff"
_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


# ---------------------------------------------------------------------------
# Dependency injection helpers, resolved from app.state (see main._build_all)
# ---------------------------------------------------------------------------


def _get_orchestrator(request: Request) -> IngestionOrchestrator:
    return request.app.state.orchestrator


def _get_log_store(request: Request) -> ILogStore:
    return request.app.state.log_store


def _get_query_service(request: Request) -> LogQueryService:
    return request.app.state.query_service


OrchestratorDep = Annotated[IngestionOrchestrator, Depends(_get_orchestrator)]
LogStoreDep = Annotated[ILogStore, Depends(_get_log_store)]
QueryServiceDep = Annotated[LogQueryService, Depends(_get_query_service)]


def _sniff_media_type(contents: bytes) -> str:
    if contents.startswith(_JPEG_MAGIC):
        return "image/jpeg"
    if contents.startswith(_PNG_MAGIC):
        return "image/png"
    return "application/octet-stream"


# ---------------------------------------------------------------------------
# Webhook + attachments
# ---------------------------------------------------------------------------


@webhook_router.post(
    "/webhook/telegram",
    status_code=200,
    responses={500: {"model": ErrorResponse}},
    summary="Receive a Telegram update",
)
async def telegram_webhook(update: TelegramUpdate, orchestrator: OrchestratorDep) -> Response:
    """Ingest one update.

    Answers 200 with an empty body whenever the payload parses, including
    for senders that are not authorized.  Download, enrichment and storage
    failures surface as a 500 through ``ErrorHandlingMiddleware``.
    """
    result = await orchestrator.handle(update)
    _logger.debug("webhook_handled", update_id=update.update_id, stage=result.stage.value)
    return Response(status_code=200)


@webhook_router.get(
    "/attachment/{attachment_id}",
    responses={404: {"model": ErrorResponse}},
    summary="Fetch raw attachment bytes",
)
async def get_attachment(attachment_id: str, log_store: LogStoreDep) -> Response:
    attachment = await log_store.get_attachment(attachment_id)
    if attachment is None:
        raise HTTPException(status_code=404, detail="Attachment not found")
    return Response(content=attachment.contents, media_type=_sniff_media_type(attachment.contents))


# ---------------------------------------------------------------------------
# Read API
# ---------------------------------------------------------------------------


@router.get(
    "/logs",
    response_model=LogListResponse,
    summary="List logs newest first, or search them",
)
async def list_logs(
    query_service: QueryServiceDep,
    query: Annotated[str | None, Query(description="Free-text search")] = None,
) -> LogListResponse:
    """Return every log with its events, or the best search matches for *query*."""
    if query:
        entries = await query_service.search(query)
    else:
        entries = await query_service.list_entries()
    return LogListResponse(
        query=query or None,
        logs=[LogEntryResponse.from_entry(entry) for entry in entries],
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return application health, version, and which integrations are configured."""
    providers: dict[str, Any] = dict(getattr(request.app.state, "provider_registry", {}))
    status = "healthy" if providers.get("telegram", False) else "degraded"
    return HealthResponse(
        status=status,
        version=request.app.version,
        providers=providers,
    )
