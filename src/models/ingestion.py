"""Ingestion state models.

One webhook call moves through these stages:

    RECEIVED → AUTHORIZED → CLASSIFIED → PERSISTED
             → [EXTRACTED → EVENTS_PERSISTED]   (text logs only)
             → INDEXED → DONE

Two terminal short-cuts end a call early without error: REJECTED (the
sender is not the configured user) and UNHANDLED (nothing to store).
Fatal errors are raised, not recorded as a stage.  A failed enrichment
is not fatal: the text call skips EXTRACTED and sets ``extraction_failed``.

Like the other models, ``IngestionResult`` is frozen; the orchestrator
advances it with ``model_copy(update={...})``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.models.log import Attachment, Event, Log


class IngestionStage(str, Enum):
    RECEIVED = "RECEIVED"
    AUTHORIZED = "AUTHORIZED"
    CLASSIFIED = "CLASSIFIED"
    PERSISTED = "PERSISTED"
    EXTRACTED = "EXTRACTED"
    EVENTS_PERSISTED = "EVENTS_PERSISTED"
    INDEXED = "INDEXED"
    DONE = "DONE"
    REJECTED = "REJECTED"
    UNHANDLED = "UNHANDLED"


class IngestionResult(BaseModel):
    """What happened to one inbound message."""

    model_config = ConfigDict(frozen=True)

    stage: IngestionStage = IngestionStage.RECEIVED
    log: Log | None = None
    attachment: Attachment | None = None
    events: list[Event] = Field(default_factory=list)
    indexed: bool = False
    # Enrichment failed; the log was kept without events.
    extraction_failed: bool = False
