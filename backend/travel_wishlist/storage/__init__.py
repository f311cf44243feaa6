import logging
import threading
from typing import Optional

from travel_wishlist.core.config import Settings, settings
from .base import MAX_INTEGER, DestinationFields, DestinationRecord, DestinationStore, RankUpdate, StorageError
from .sql_store import PostgresDestinationStore, SQLiteDestinationStore

logger = logging.getLogger(__name__)

_store: Optional[DestinationStore] = None
_store_lock = threading.Lock()


def create_store(config: Settings) -> DestinationStore:
    """Pick the backend from configuration: hosted PostgreSQL if a connection string is set."""
    if config.postgres_url:
        logger.info("Using hosted PostgreSQL destination store")
        return PostgresDestinationStore(config.postgres_url)

    logger.info(f"Using local SQLite destination store at {config.sqlite_path}")
    return SQLiteDestinationStore(config.sqlite_path)


def get_store() -> DestinationStore:
    """Process-wide store, selected once on first use."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = create_store(settings)
    return _store


__all__ = [
    "MAX_INTEGER",
    "DestinationFields",
    "DestinationRecord",
    "DestinationStore",
    "RankUpdate",
    "StorageError",
    "PostgresDestinationStore",
    "SQLiteDestinationStore",
    "create_store",
    "get_store",
]
