"""lifelog domain models: re-exports all public model classes.

Submodules by concern:
    - log.py      - Log, Attachment, Event, EventOutput, FoodItem
    - telegram.py - inbound Telegram webhook payloads
    - search.py   - semantic search hits
    - ingestion.py - per-message ingestion stages and result
"""

from __future__ import annotations

from src.models.log import (
    Attachment,
    Event,
    EventOutput,
    EventType,
    FoodItem,
    FoodPhoto,
    Log,
    LogEntry,
)
from src.models.ingestion import IngestionResult, IngestionStage
from src.models.search import SearchHit
from src.models.telegram import (
    PhotoSize,
    TelegramFile,
    TelegramMessage,
    TelegramUpdate,
    TelegramUser,
)

__all__ = [
    "Attachment",
    "Event",
    "EventOutput",
    "EventType",
    "FoodItem",
    "FoodPhoto",
    "IngestionResult",
    "IngestionStage",
    "Log",
    "LogEntry",
    "PhotoSize",
    "SearchHit",
    "TelegramFile",
    "TelegramMessage",
    "TelegramUpdate",
    "TelegramUser",
]
