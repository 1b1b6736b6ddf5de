"""Semantic search result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SearchHit(BaseModel):
    """A content match from the search index, mapped back to its log."""

    model_config = ConfigDict(frozen=True)

    object_id: str
    log_id: str | None = None
    content: str | None = None
    score: float = 0.0
