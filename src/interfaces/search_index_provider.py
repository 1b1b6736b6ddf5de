"""Abstract base class for semantic search index providers.

Logs are pushed into the index as text or image objects tagged with the
log id, and later retrieved by natural-language query.  The ranking is the
provider's business; lifelog only maps hits back to logs through the
``log`` property.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from src.models.search import SearchHit


# Concrete implementation: OperandIndexProvider (src/providers/search_index/)
class ISearchIndexProvider(ABC):
    """Contract for the semantic search backend."""

    @abstractmethod
    async def create_object(
        self,
        parent_id: str,
        object_type: str,
        metadata: dict[str, Any],
        properties: dict[str, Any] | None = None,
    ) -> str:
        """Create an indexed object under *parent_id*.

        Parameters
        ----------
        parent_id:
            The collection the object belongs to.
        object_type:
            ``"text"`` or ``"image"``.
        metadata:
            Type-specific payload: ``{"text": ...}`` or ``{"imageUrl": ...}``.
        properties:
            Retrievable key/values, e.g. ``{"log": <log id>}``.

        Returns
        -------
        str
            The backend's identifier for the new object.

        Raises
        ------
        src.utils.errors.IndexingError
            If the backend rejects the request.
        """

    @abstractmethod
    async def search_contents(
        self,
        parent_ids: list[str],
        query: str,
        max_results: int = 12,
    ) -> list[SearchHit]:
        """Search objects under *parent_ids*, best matches first.

        Raises
        ------
        src.utils.errors.IndexingError
            If the backend rejects the request.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
