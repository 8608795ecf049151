"""In-process dict store, useful for dry runs and measuring harness overhead."""

from typing import Dict, List, Optional, Tuple

from .base import Batch, KeyValueStore


class MemoryBatch(Batch):
    """Stages operations and applies them to the dict on commit."""

    def __init__(self, data: Dict[bytes, bytes]):
        super().__init__()
        self._data = data
        self._ops: List[Tuple[bytes, Optional[bytes]]] = []

    def _put(self, key: bytes, value: bytes) -> None:
        self._ops.append((bytes(key), bytes(value)))

    def _delete(self, key: bytes) -> None:
        self._ops.append((bytes(key), None))

    def _commit(self) -> None:
        for key, value in self._ops:
            if value is None:
                self._data.pop(key, None)
            else:
                self._data[key] = value
        self._ops = []

    def _abort(self) -> None:
        self._ops = []


class MemoryStore(KeyValueStore):
    """Dictionary-backed store. ``path`` is only used as a label."""

    name = "memory"

    def __init__(self, path: str = ":memory:", options: Optional[Dict] = None):
        super().__init__(path, options)
        self._data: Dict[bytes, bytes] = {}

    def get(self, key: bytes) -> Optional[bytes]:
        return self._data.get(bytes(key))

    def exists(self, key: bytes) -> bool:
        return bytes(key) in self._data

    def batch(self) -> MemoryBatch:
        return MemoryBatch(self._data)

    def __len__(self) -> int:
        return len(self._data)
