"""Storage backend contract.

A backend is opened by path and offers point lookups, existence checks and
atomic write batches. Backend-native errors are translated to ``StoreError``.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..errors import KVBenchError
from ..utils.logger import setup_logger


class StoreError(KVBenchError):
    """A storage backend operation failed."""


class Batch(ABC):
    """Atomic group of puts and deletes.

    A batch ends with ``commit`` or ``abort``; any further put, delete or
    commit raises ``StoreError``. A batch whose commit failed is still open
    and must be aborted to release the backend.
    """

    def __init__(self):
        self._committed = False
        self._aborted = False

    def put(self, key: bytes, value: bytes) -> None:
        self._check_open()
        self._put(key, value)

    def delete(self, key: bytes) -> None:
        self._check_open()
        self._delete(key)

    def commit(self) -> None:
        self._check_open()
        self._commit()
        self._committed = True

    def abort(self) -> None:
        """Discard staged operations. No effect on a finished batch."""
        if self._committed or self._aborted:
            return
        self._aborted = True
        self._abort()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def aborted(self) -> bool:
        return self._aborted

    def _check_open(self) -> None:
        if self._committed:
            raise StoreError("Batch has already been committed")
        if self._aborted:
            raise StoreError("Batch has been aborted")

    @abstractmethod
    def _put(self, key: bytes, value: bytes) -> None:
        ...

    @abstractmethod
    def _delete(self, key: bytes) -> None:
        ...

    @abstractmethod
    def _commit(self) -> None:
        ...

    @abstractmethod
    def _abort(self) -> None:
        ...


class KeyValueStore(ABC):
    """Key-value storage engine under benchmark."""

    name = "base"

    def __init__(self, path: str, options: Optional[Dict] = None):
        """Open the store.

        Args:
            path: Location of the store's data files
            options: Backend-specific options
        """
        self.path = path
        self.options = dict(options or {})
        self.logger = setup_logger(self.__class__.__name__)

    @abstractmethod
    def get(self, key: bytes) -> Optional[bytes]:
        """Return the value stored under ``key``, or None."""

    @abstractmethod
    def exists(self, key: bytes) -> bool:
        """Return whether ``key`` is present."""

    @abstractmethod
    def batch(self) -> Batch:
        """Start a new write batch."""

    def close(self) -> None:
        """Release the store's resources."""

    def __enter__(self) -> 'KeyValueStore':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={self.path!r})"
