"""Log persistence providers.

SQLiteLogStore keeps logs, photo attachments and extracted events in
data/lifelog.db.
"""

from src.providers.storage.sqlite_log_store import SQLiteLogStore

__all__ = ["SQLiteLogStore"]
