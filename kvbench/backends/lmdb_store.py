"""LMDB-backed store (one named database, one write transaction per batch)."""

from typing import Dict, Optional

import lmdb

from .base import Batch, KeyValueStore, StoreError

# 1 TiB
DEFAULT_MAP_SIZE = 1_099_511_627_776
DB_NAME = b"lmdb"


class LmdbBatch(Batch):
    def __init__(self, env: lmdb.Environment, db):
        super().__init__()
        try:
            self._txn = env.begin(db=db, write=True)
        except lmdb.Error as e:
            raise StoreError(f"lmdb begin failed: {e}") from e

    def _put(self, key: bytes, value: bytes) -> None:
        try:
            self._txn.put(key, value)
        except lmdb.Error as e:
            raise StoreError(f"lmdb put failed: {e}") from e

    def _delete(self, key: bytes) -> None:
        try:
            self._txn.delete(key)
        except lmdb.Error as e:
            raise StoreError(f"lmdb delete failed: {e}") from e

    def _commit(self) -> None:
        try:
            self._txn.commit()
        except lmdb.Error as e:
            raise StoreError(f"lmdb commit failed: {e}") from e

    def _abort(self) -> None:
        try:
            self._txn.abort()
        except lmdb.Error as e:
            raise StoreError(f"lmdb abort failed: {e}") from e


class LmdbStore(KeyValueStore):
    """LMDB store rooted at directory ``path``.

    Writes are not fsynced by default (``sync: false``), matching the
    asynchronous write behaviour of the other engines.

    Options:
        map_size: Maximum database size in bytes
        sync: Flush buffers to disk on commit
        max_dbs: Maximum number of named databases
    """

    name = "lmdb"

    def __init__(self, path: str, options: Optional[Dict] = None):
        super().__init__(path, options)
        try:
            map_size = int(self.options.get('map_size', DEFAULT_MAP_SIZE))
            max_dbs = int(self.options.get('max_dbs', 1))
        except (TypeError, ValueError) as e:
            raise StoreError(f"Invalid lmdb option: {e}") from e
        try:
            self._env = lmdb.open(
                path,
                map_size=map_size,
                max_dbs=max_dbs,
                sync=bool(self.options.get('sync', False)),
            )
            self._db = self._env.open_db(DB_NAME, create=True)
        except lmdb.Error as e:
            raise StoreError(f"Failed to open lmdb store at {path}: {e}") from e
        self.logger.debug(f"Opened lmdb store at {path}")

    def get(self, key: bytes) -> Optional[bytes]:
        try:
            with self._env.begin(db=self._db) as txn:
                return txn.get(key)
        except lmdb.Error as e:
            raise StoreError(f"lmdb get failed: {e}") from e

    def exists(self, key: bytes) -> bool:
        try:
            with self._env.begin(db=self._db) as txn:
                return txn.get(key) is not None
        except lmdb.Error as e:
            raise StoreError(f"lmdb exists failed: {e}") from e

    def batch(self) -> LmdbBatch:
        return LmdbBatch(self._env, self._db)

    def close(self) -> None:
        self._env.close()
