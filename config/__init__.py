"""Configuration module."""

from config.settings import (
    DatabaseType,
    Settings,
    StorageBackend,
    settings,
)

__all__ = [
    "DatabaseType",
    "Settings",
    "StorageBackend",
    "settings",
]
