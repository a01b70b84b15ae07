"""Bet storage backends."""

from typing import Optional

from config import Settings, StorageBackend, settings as default_settings
from config.logging_config import get_logger
from betledger.database import DatabaseConnection
from betledger.storage.base import BetStore, filter_bets
from betledger.storage.json_file import JsonFileBetStore
from betledger.storage.memory import InMemoryBetStore
from betledger.storage.sql import SqlBetStore

logger = get_logger(__name__)


def create_store(settings: Optional[Settings] = None) -> BetStore:
    """Build the store the settings ask for. Call initialize() on it before use."""
    settings = settings or default_settings
    backend = settings.storage_backend

    logger.info("Creating bet store", backend=backend.value)

    if settings.is_sql_backend():
        return SqlBetStore(DatabaseConnection(settings))
    if backend == StorageBackend.JSON:
        return JsonFileBetStore(settings.local_storage_dir)
    return InMemoryBetStore()


__all__ = [
    "BetStore",
    "InMemoryBetStore",
    "JsonFileBetStore",
    "SqlBetStore",
    "create_store",
    "filter_bets",
]
