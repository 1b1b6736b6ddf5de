"""Custom exception hierarchy for lifelog.

All application exceptions inherit from :class:`LifelogError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "telegram", "nutritionix", "operand") caused the
failure.

The hierarchy is organized by ingestion concern:

    LifelogError  (base -- catch-all for any lifelog error)
    +-- TransportError      (attachment fetch chain against the chat platform)
    +-- EnrichmentError     (nutrition lookup for the food extractor)
    +-- PersistenceError    (log / attachment / event storage)
    +-- IndexingError       (semantic search backend)
    +-- ConfigurationError  (startup / missing config)

Authorization denial is deliberately absent: an unknown sender is
acknowledged and dropped, never raised.

Failure policy:
    TransportError, EnrichmentError and PersistenceError propagate out of
    the ingestion orchestrator.  IndexingError is raised by the index
    provider but caught and logged by the index forwarder.
"""


class LifelogError(Exception):
    """Base exception for all lifelog errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[telegram] getFile returned 404``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# External service errors
# ---------------------------------------------------------------------------

class TransportError(LifelogError):
    """Raised when the chat platform file lookup or download fails.

    Fatal to the current request: no attachment or log is persisted.
    """

    def __init__(
        self,
        message: str = "Attachment transport failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EnrichmentError(LifelogError):
    """Raised when the nutrition lookup service does not return success.

    Aborts the extraction pipeline for the message; the already persisted
    log is kept.
    """

    def __init__(
        self,
        message: str = "Nutrition enrichment failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class IndexingError(LifelogError):
    """Raised when the semantic search backend rejects a request."""

    def __init__(
        self,
        message: str = "Search index operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Storage / configuration errors
# ---------------------------------------------------------------------------

class PersistenceError(LifelogError):
    """Raised when a log, attachment or event cannot be stored or read."""

    def __init__(
        self,
        message: str = "Persistence operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(LifelogError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
