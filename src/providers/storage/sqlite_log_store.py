"""SQLite-backed log store implementing ILogStore.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Providers (concrete adapter implementing ILogStore).
#
# Database: ``data/lifelog.db`` with three tables:
#   - attachments - photo bytes, written before the owning log
#   - logs        - one row per ingested message (text XOR attachment)
#   - events      - facts extracted from a text log, FK to logs
#
# Rows are insert-only.  ``PRAGMA foreign_keys=ON`` is set on every
# connection so an event can never reference a missing log, and
# ``create_events`` checks the log inside the same transaction before
# inserting the batch.
#
# Uses ``aiosqlite`` for async I/O and ``PRAGMA journal_mode=WAL`` for
# concurrent read safety.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite
import structlog

from src.interfaces.log_store import ILogStore
from src.models.log import Attachment, Event, EventOutput, EventType, Log, LogEntry
from src.utils.errors import PersistenceError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/lifelog.db")

# ── Schema DDL ────────────────────────────────────────────────────────

_CREATE_ATTACHMENTS_TABLE = """\
CREATE TABLE IF NOT EXISTS attachments (
    id          TEXT PRIMARY KEY,
    created_at  TEXT NOT NULL,
    contents    BLOB NOT NULL
);
"""

_CREATE_LOGS_TABLE = """\
CREATE TABLE IF NOT EXISTS logs (
    id             TEXT PRIMARY KEY,
    created_at     TEXT NOT NULL,
    message        TEXT,
    attachment_id  TEXT REFERENCES attachments(id),
    CHECK ((message IS NULL) <> (attachment_id IS NULL))
);
"""

_CREATE_EVENTS_TABLE = """\
CREATE TABLE IF NOT EXISTS events (
    id        TEXT PRIMARY KEY,
    seq       INTEGER NOT NULL,
    log_id    TEXT NOT NULL REFERENCES logs(id),
    type      TEXT NOT NULL,
    meta      TEXT
);
"""

_CREATE_INDICES = [
    "CREATE INDEX IF NOT EXISTS idx_logs_created ON logs(created_at);",
    "CREATE INDEX IF NOT EXISTS idx_events_log ON events(log_id, seq);",
]

# ── DML ───────────────────────────────────────────────────────────────

_INSERT_ATTACHMENT = "INSERT INTO attachments (id, created_at, contents) VALUES (?, ?, ?);"
_INSERT_LOG = "INSERT INTO logs (id, created_at, message, attachment_id) VALUES (?, ?, ?, ?);"
_INSERT_EVENT = "INSERT INTO events (id, seq, log_id, type, meta) VALUES (?, ?, ?, ?, ?);"

_SELECT_ATTACHMENT = "SELECT id, created_at, contents FROM attachments WHERE id = ?;"
_SELECT_LOG = "SELECT id, created_at, message, attachment_id FROM logs WHERE id = ?;"
_SELECT_LOGS = (
    "SELECT id, created_at, message, attachment_id FROM logs "
    "ORDER BY created_at DESC, rowid DESC;"
)
_SELECT_EVENTS_FOR_LOG = "SELECT id, log_id, type, meta FROM events WHERE log_id = ? ORDER BY seq;"
_SELECT_ALL_EVENTS = "SELECT id, log_id, type, meta FROM events ORDER BY log_id, seq;"


class SQLiteLogStore(ILogStore):
    """SQLite-backed persistence for logs, attachments and events."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    @asynccontextmanager
    async def _connect(self, operation: str) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection with FK enforcement; wrap driver errors."""
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                await db.execute("PRAGMA foreign_keys=ON;")
                yield db
        except aiosqlite.Error as exc:
            logger.error("log_store_error", operation=operation, error=str(exc))
            raise PersistenceError(
                message=f"{operation} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def initialize(self) -> None:
        """Create all tables and indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self._connect("initialize") as db:
            await db.execute("PRAGMA journal_mode=WAL;")
            await db.execute(_CREATE_ATTACHMENTS_TABLE)
            await db.execute(_CREATE_LOGS_TABLE)
            await db.execute(_CREATE_EVENTS_TABLE)
            for idx_sql in _CREATE_INDICES:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("log_db_initialized", path=str(self._db_path))

    def get_provider_name(self) -> str:
        return "sqlite_log_store"

    # ── Writes ─────────────────────────────────────────────────────────

    async def create_attachment(self, contents: bytes) -> Attachment:
        attachment = Attachment(contents=contents)
        async with self._connect("create_attachment") as db:
            await db.execute(
                _INSERT_ATTACHMENT,
                (attachment.id, attachment.created_at.isoformat(), attachment.contents),
            )
            await db.commit()
        logger.info("attachment_created", attachment_id=attachment.id, bytes=len(contents))
        return attachment

    async def create_log(
        self,
        message: str | None = None,
        attachment_id: str | None = None,
    ) -> Log:
        log = Log(message=message, attachment_id=attachment_id)
        async with self._connect("create_log") as db:
            await db.execute(
                _INSERT_LOG,
                (log.id, log.created_at.isoformat(), log.message, log.attachment_id),
            )
            await db.commit()
        logger.info("log_created", log_id=log.id, kind=log.kind)
        return log

    async def create_events(self, log_id: str, outputs: list[EventOutput]) -> list[Event]:
        events = [output.to_event(log_id) for output in outputs]
        async with self._connect("create_events") as db:
            cursor = await db.execute("SELECT 1 FROM logs WHERE id = ?;", (log_id,))
            if await cursor.fetchone() is None:
                raise PersistenceError(
                    message=f"Cannot attach events to unknown log {log_id}",
                    provider_name=self.get_provider_name(),
                )
            await db.executemany(
                _INSERT_EVENT,
                [
                    (
                        event.id,
                        seq,
                        event.log_id,
                        event.type.value,
                        json.dumps(event.meta) if event.meta is not None else None,
                    )
                    for seq, event in enumerate(events)
                ],
            )
            await db.commit()
        logger.info("events_created", log_id=log_id, count=len(events))
        return events

    # ── Reads ──────────────────────────────────────────────────────────

    async def get_attachment(self, attachment_id: str) -> Attachment | None:
        async with self._connect("get_attachment") as db:
            cursor = await db.execute(_SELECT_ATTACHMENT, (attachment_id,))
            row = await cursor.fetchone()
        if row is None:
            return None
        return Attachment(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            contents=bytes(row["contents"]),
        )

    async def get_log_entry(self, log_id: str) -> LogEntry | None:
        async with self._connect("get_log_entry") as db:
            cursor = await db.execute(_SELECT_LOG, (log_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            cursor = await db.execute(_SELECT_EVENTS_FOR_LOG, (log_id,))
            event_rows = await cursor.fetchall()
        return LogEntry(
            log=self._row_to_log(dict(row)),
            events=[self._row_to_event(dict(r)) for r in event_rows],
        )

    async def list_log_entries(self) -> list[LogEntry]:
        async with self._connect("list_log_entries") as db:
            cursor = await db.execute(_SELECT_LOGS)
            log_rows = await cursor.fetchall()
            cursor = await db.execute(_SELECT_ALL_EVENTS)
            event_rows = await cursor.fetchall()

        events_by_log: dict[str, list[Event]] = {}
        for r in event_rows:
            event = self._row_to_event(dict(r))
            events_by_log.setdefault(event.log_id, []).append(event)

        return [
            LogEntry(log=log, events=events_by_log.get(log.id, []))
            for log in (self._row_to_log(dict(r)) for r in log_rows)
        ]

    # ── Row mapping ────────────────────────────────────────────────────

    @staticmethod
    def _row_to_log(row: dict[str, Any]) -> Log:
        return Log(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            message=row["message"],
            attachment_id=row["attachment_id"],
        )

    @staticmethod
    def _row_to_event(row: dict[str, Any]) -> Event:
        return Event(
            id=row["id"],
            log_id=row["log_id"],
            type=EventType(row["type"]),
            meta=json.loads(row["meta"]) if row["meta"] else None,
        )
