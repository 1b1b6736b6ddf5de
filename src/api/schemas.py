"""Pydantic response schemas for the lifelog API.

The webhook endpoint takes :class:`~src.models.telegram.TelegramUpdate`
directly and answers with an empty body, so only the read endpoints and
errors need schemas here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.models.log import EventType, LogEntry


class EventResponse(BaseModel):
    """An extracted event as shown alongside its log."""

    type: EventType
    meta: dict[str, Any] | None = None


class LogEntryResponse(BaseModel):
    """One log with its events and, for photos, a relative attachment URL."""

    id: str
    created_at: datetime
    type: str = Field(description='"text" or "image"')
    message: str | None = None
    attachment_id: str | None = None
    attachment_url: str | None = None
    events: list[EventResponse] = Field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: LogEntry) -> LogEntryResponse:
        log = entry.log
        return cls(
            id=log.id,
            created_at=log.created_at,
            type=log.kind,
            message=log.message,
            attachment_id=log.attachment_id,
            attachment_url=f"/api/attachment/{log.attachment_id}" if log.attachment_id else None,
            events=[EventResponse(type=e.type, meta=e.meta) for e in entry.events],
        )


class LogListResponse(BaseModel):
    """Logs newest first, or search results best match first."""

    query: str | None = None
    logs: list[LogEntryResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
