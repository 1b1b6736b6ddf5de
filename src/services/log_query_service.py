"""Read side for the companion view: list logs, or search them.

Listing returns every log newest first.  Searching asks the index for the
best content matches, keeps the first hit per indexed object, and maps
each hit back to a stored log through its ``log`` property.  Hits whose
log no longer resolves are skipped.
"""

from __future__ import annotations

from src.interfaces.log_store import ILogStore
from src.interfaces.search_index_provider import ISearchIndexProvider
from src.models.log import LogEntry
from src.utils.logging import get_logger

_SEARCH_MAX_RESULTS = 12


class LogQueryService:
    """Lists and searches stored logs."""

    def __init__(
        self,
        log_store: ILogStore,
        index_provider: ISearchIndexProvider | None = None,
        collection_id: str = "",
    ) -> None:
        self._log_store = log_store
        self._index_provider = index_provider
        self._collection_id = collection_id
        self._logger = get_logger(__name__)

    @property
    def search_enabled(self) -> bool:
        return self._index_provider is not None and bool(self._collection_id)

    async def list_entries(self) -> list[LogEntry]:
        return await self._log_store.list_log_entries()

    async def search(self, query: str, max_results: int = _SEARCH_MAX_RESULTS) -> list[LogEntry]:
        """Return logs matching *query*, best match first.

        Falls back to the full listing when search is not configured.
        """
        if not self.search_enabled:
            return await self.list_entries()

        hits = await self._index_provider.search_contents(
            parent_ids=[self._collection_id],
            query=query,
            max_results=max_results,
        )

        entries: list[LogEntry] = []
        seen_objects: set[str] = set()
        for hit in hits:
            if hit.object_id in seen_objects:
                continue
            seen_objects.add(hit.object_id)
            if not hit.log_id:
                continue
            entry = await self._log_store.get_log_entry(hit.log_id)
            if entry is not None:
                entries.append(entry)

        self._logger.info("log_search_complete", query=query, hits=len(hits), logs=len(entries))
        return entries
