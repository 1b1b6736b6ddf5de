"""Ingestion orchestrator: the top-level coordinator for one webhook call.

Coordinates authorization, classification, attachment download,
persistence, event extraction and indexing for a single Telegram message.
Each step advances a frozen :class:`IngestionResult` via ``model_copy``.

ORDERING GUARANTEES:
    - Photo logs: the attachment is downloaded and stored before the log
      that references it.  A failed download raises ``TransportError``
      and nothing is stored.
    - Text logs: the log is stored first, independent of extraction.  If
      extraction fails (``EnrichmentError``) the log stays, no events are
      stored, the text is still indexed and the call completes normally.
    - Events are stored only after their log is committed, as one batch.
    - Indexing runs last and never fails the call (see IndexForwarder).

An unauthorized sender is not an error: the call ends at REJECTED and no
other component is touched.
"""

from __future__ import annotations

import structlog

from src.interfaces.chat_file_provider import IChatFileProvider
from src.interfaces.log_store import ILogStore
from src.models.ingestion import IngestionResult, IngestionStage
from src.models.telegram import PhotoSize, TelegramUpdate
from src.pipeline.classifier import PhotoMessage, TextMessage, classify
from src.pipeline.extraction import ExtractionPipeline
from src.pipeline.index_forwarder import IndexForwarder
from src.utils.errors import EnrichmentError
from src.utils.logging import get_logger


class IngestionOrchestrator:
    """Runs one inbound message through the ingestion stages.

    All collaborators are injected at construction time; the orchestrator
    never reads configuration itself.

    Parameters
    ----------
    authorized_username:
        The only Telegram username whose messages are ingested.  Empty
        rejects everyone.
    file_provider:
        Resolves photo messages to bytes.
    log_store:
        Persists logs, attachments and events.
    extraction_pipeline:
        Extracts events from text logs.
    index_forwarder:
        Pushes persisted content to the search index (best effort).
    """

    def __init__(
        self,
        authorized_username: str,
        file_provider: IChatFileProvider,
        log_store: ILogStore,
        extraction_pipeline: ExtractionPipeline,
        index_forwarder: IndexForwarder,
    ) -> None:
        self._authorized_username = authorized_username
        self._file_provider = file_provider
        self._log_store = log_store
        self._pipeline = extraction_pipeline
        self._forwarder = index_forwarder
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def is_authorized(self, username: str | None) -> bool:
        return bool(self._authorized_username) and username == self._authorized_username

    async def handle(self, update: TelegramUpdate) -> IngestionResult:
        """Ingest one update and return the stage it finished in.

        Raises
        ------
        TransportError
            Photo download failed; nothing was stored.
        PersistenceError
            A storage write failed.
        """
        message = update.message
        result = IngestionResult()

        with structlog.contextvars.bound_contextvars(update_id=update.update_id):
            # edited_message, channel_post and friends carry no ``message``
            if message is None:
                self._logger.info("update_without_message")
                return result.model_copy(update={"stage": IngestionStage.UNHANDLED})

            username = message.from_.username if message.from_ else None
            if not self.is_authorized(username):
                self._logger.info("sender_denied", username=username)
                return result.model_copy(update={"stage": IngestionStage.REJECTED})
            result = result.model_copy(update={"stage": IngestionStage.AUTHORIZED})

            classification = classify(message)
            result = result.model_copy(update={"stage": IngestionStage.CLASSIFIED})

            if isinstance(classification, TextMessage):
                result = await self._ingest_text(result, classification.text)
            elif isinstance(classification, PhotoMessage):
                result = await self._ingest_photo(result, list(classification.photos))
            else:
                self._logger.info("message_unhandled", reason=classification.reason)
                return result.model_copy(update={"stage": IngestionStage.UNHANDLED})

            return result.model_copy(update={"stage": IngestionStage.DONE})

    async def _ingest_text(self, result: IngestionResult, text: str) -> IngestionResult:
        log = await self._log_store.create_log(message=text)
        result = result.model_copy(update={"stage": IngestionStage.PERSISTED, "log": log})

        try:
            outputs = await self._pipeline.run(text)
        except EnrichmentError as exc:
            # Outputs collected before the failure are dropped with the run.
            self._logger.error(
                "extraction_failed",
                log_id=log.id,
                provider=exc.provider_name,
                error=exc.message,
            )
            outputs = []
            result = result.model_copy(update={"extraction_failed": True})
        else:
            result = result.model_copy(update={"stage": IngestionStage.EXTRACTED})

        if outputs:
            events = await self._log_store.create_events(log.id, outputs)
            result = result.model_copy(
                update={"stage": IngestionStage.EVENTS_PERSISTED, "events": events}
            )

        indexed = await self._forwarder.forward_text(log.id, text)
        self._logger.info(
            "text_log_ingested",
            log_id=log.id,
            events=[e.type.value for e in result.events],
            extraction_failed=result.extraction_failed,
            indexed=indexed,
        )
        return result.model_copy(update={"stage": IngestionStage.INDEXED, "indexed": indexed})

    async def _ingest_photo(self, result: IngestionResult, photos: list[PhotoSize]) -> IngestionResult:
        contents = await self._file_provider.download_photo(photos)
        attachment = await self._log_store.create_attachment(contents)
        log = await self._log_store.create_log(attachment_id=attachment.id)
        result = result.model_copy(
            update={"stage": IngestionStage.PERSISTED, "log": log, "attachment": attachment}
        )

        indexed = await self._forwarder.forward_image(log.id, attachment.id)
        self._logger.info(
            "photo_log_ingested",
            log_id=log.id,
            attachment_id=attachment.id,
            indexed=indexed,
        )
        return result.model_copy(update={"stage": IngestionStage.INDEXED, "indexed": indexed})
