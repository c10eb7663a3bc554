"""Episode and show-note persistence backends."""

from ..config import ServerConfig
from .base import Storage
from .memory import MemoryStorage
from .sqlite import SQLiteStorage


def create_storage(config: ServerConfig) -> Storage:
    """Build the backend named by config.storage_backend."""
    if config.storage_backend == "sqlite":
        return SQLiteStorage(config.sqlite_path)
    return MemoryStorage()


__all__ = ["MemoryStorage", "SQLiteStorage", "Storage", "create_storage"]
