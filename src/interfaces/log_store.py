"""Abstract base class for log persistence providers.

Defines the contract for storing logs, attachments and events.
Implementations may use SQLite (local), PostgreSQL, or any other backend.
The ingestion orchestrator depends only on this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.log import Attachment, Event, EventOutput, Log, LogEntry


class ILogStore(ABC):
    """Contract for log / attachment / event persistence.

    All operations are async.  Rows are created once and never updated or
    deleted through this interface.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables/indices if they don't exist.  Called at startup."""

    @abstractmethod
    async def create_attachment(self, contents: bytes) -> Attachment:
        """Store binary content and return the new attachment."""

    @abstractmethod
    async def create_log(
        self,
        message: str | None = None,
        attachment_id: str | None = None,
    ) -> Log:
        """Store a log carrying either *message* or *attachment_id*.

        Raises
        ------
        ValueError
            If both or neither payload is given.
        src.utils.errors.PersistenceError
            If the write fails.
        """

    @abstractmethod
    async def create_events(self, log_id: str, outputs: list[EventOutput]) -> list[Event]:
        """Store all *outputs* as events of *log_id* in one batch.

        Parameters
        ----------
        log_id:
            Identifier of an already committed log.
        outputs:
            Extractor outputs in pipeline order.

        Returns
        -------
        list[Event]
            The stored events, in the same order as *outputs*.

        Raises
        ------
        src.utils.errors.PersistenceError
            If the log does not exist or the write fails.  Either every
            event is stored or none is.
        """

    @abstractmethod
    async def get_attachment(self, attachment_id: str) -> Attachment | None:
        """Return the attachment, or ``None`` if it does not exist."""

    @abstractmethod
    async def get_log_entry(self, log_id: str) -> LogEntry | None:
        """Return a log with its events, or ``None`` if it does not exist."""

    @abstractmethod
    async def list_log_entries(self) -> list[LogEntry]:
        """Return every log with its events, newest first."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
