"""Utility modules for lifelog.

- **errors** -- Exception hierarchy rooted at LifelogError; each external
  concern raises its own subclass so callers decide what is fatal.
- **concurrency** -- semaphore-bounded ``asyncio.gather`` used by the
  concurrent extraction mode.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from src.utils.concurrency import throttled_gather
from src.utils.errors import (
    ConfigurationError,
    EnrichmentError,
    IndexingError,
    LifelogError,
    PersistenceError,
    TransportError,
)
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "EnrichmentError",
    "IndexingError",
    "LifelogError",
    "PersistenceError",
    "TransportError",
    "configure_logging",
    "get_logger",
    "throttled_gather",
]
