"""Index forwarder: best-effort push of log content to the search index.

Text logs are indexed as ``"text"`` objects, photo logs as ``"image"``
objects pointing at the public attachment URL.  Every object carries the
log id in ``properties.log`` so search hits map back to logs.

Failures are logged and swallowed: by the time indexing runs the log and
its events are already committed, and indexing never rolls them back.
"""

from __future__ import annotations

from typing import Any

import structlog

from src.interfaces.search_index_provider import ISearchIndexProvider
from src.utils.logging import get_logger


class IndexForwarder:
    """Forwards persisted logs to the semantic search backend.

    Parameters
    ----------
    index_provider:
        The search backend, or ``None`` when indexing is not configured.
    collection_id:
        Index target.  Empty disables forwarding.
    frontend_url:
        Public base URL used to build absolute attachment links.
    """

    def __init__(
        self,
        index_provider: ISearchIndexProvider | None,
        collection_id: str,
        frontend_url: str,
    ) -> None:
        self._provider = index_provider
        self._collection_id = collection_id
        self._frontend_url = frontend_url.rstrip("/")
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def enabled(self) -> bool:
        return self._provider is not None and bool(self._collection_id)

    @property
    def collection_id(self) -> str:
        return self._collection_id

    def attachment_url(self, attachment_id: str) -> str:
        return f"{self._frontend_url}/api/attachment/{attachment_id}"

    async def forward_text(self, log_id: str, text: str) -> bool:
        """Index a text log.  Returns True if the object was created."""
        if not text:
            return False
        return await self._push(log_id, "text", {"text": text})

    async def forward_image(self, log_id: str, attachment_id: str) -> bool:
        """Index a photo log by its public URL.  Returns True if created."""
        return await self._push(log_id, "image", {"imageUrl": self.attachment_url(attachment_id)})

    async def _push(self, log_id: str, object_type: str, metadata: dict[str, Any]) -> bool:
        if not self.enabled:
            return False
        try:
            object_id = await self._provider.create_object(
                parent_id=self._collection_id,
                object_type=object_type,
                metadata=metadata,
                properties={"log": log_id},
            )
        except Exception as exc:
            self._logger.warning(
                "index_forward_failed",
                log_id=log_id,
                type=object_type,
                error=str(exc),
            )
            return False

        self._logger.info("index_forwarded", log_id=log_id, type=object_type, object_id=object_id)
        return True
