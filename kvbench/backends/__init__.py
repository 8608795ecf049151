"""Storage backends and the registry used to select them by name."""

from typing import Dict, Optional, Type

from ..errors import UnknownBackendError
from .base import Batch, KeyValueStore, StoreError
from .lmdb_store import LmdbStore
from .memory import MemoryStore
from .sqlite_store import SqliteStore

STORE_REGISTRY: Dict[str, Type[KeyValueStore]] = {
    MemoryStore.name: MemoryStore,
    SqliteStore.name: SqliteStore,
    LmdbStore.name: LmdbStore,
}


def open_store(db_type: str, path: str, options: Optional[Dict] = None) -> KeyValueStore:
    """Open a registered backend.

    Args:
        db_type: Registry name of the backend
        path: Location of the backend's data files
        options: Backend-specific options

    Returns:
        Opened store

    Raises:
        UnknownBackendError: If no backend is registered under ``db_type``
    """
    try:
        store_cls = STORE_REGISTRY[db_type]
    except KeyError:
        available = ", ".join(sorted(STORE_REGISTRY))
        raise UnknownBackendError(f"Unknown db type: {db_type} (available: {available})") from None
    return store_cls(path, options)


__all__ = [
    "Batch",
    "KeyValueStore",
    "StoreError",
    "MemoryStore",
    "SqliteStore",
    "LmdbStore",
    "STORE_REGISTRY",
    "open_store",
]
