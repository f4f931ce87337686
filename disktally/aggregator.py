from __future__ import annotations
import logging
import threading
from concurrent.futures import Executor
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence

from .config import DEFAULT_CHUNK_SIZE
from .models import FileRecord
from .utils import normalize_keys, root_key

log = logging.getLogger(__name__)

LOCK_STRIPES = 64

class SizeMap:
    """Path-prefix key -> accumulated bytes, shared by the aggregation workers.

    Writes go through `upsert` only; each key hashes to one of a fixed set of
    locks so the read-modify-write on a key is indivisible while updates to
    unrelated keys proceed in parallel. `close()` freezes the map.
    """

    def __init__(self, root: str, stripes: int = LOCK_STRIPES):
        self.root = root_key(root)
        self._root_depth = len(normalize_keys(root))
        self._data: Dict[str, int] = {self.root: 0}
        self._locks = [threading.Lock() for _ in range(stripes)]
        self._closed = False

    def upsert(self, key: str, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"negative size for {key}: {amount}")
        if self._closed:
            raise RuntimeError("SizeMap is closed")
        with self._locks[hash(key) % len(self._locks)]:
            value = self._data.get(key, 0) + amount
            self._data[key] = value
        return value

    def keys_for(self, path: str) -> List[str]:
        """Keys a file at `path` rolls up into: the root and everything below it."""
        keys = normalize_keys(path)
        if self._root_depth == 0:
            return [self.root] + keys
        return keys[self._root_depth - 1:]

    def add_file(self, record: FileRecord) -> List[str]:
        keys = self.keys_for(record.path)
        for key in keys:
            self.upsert(key, record.size)
        return keys

    def close(self) -> Mapping[str, int]:
        self._closed = True
        return self.snapshot()

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> Mapping[str, int]:
        if self._closed:
            return MappingProxyType(self._data)
        return MappingProxyType(dict(self._data))

    def __len__(self):
        return len(self._data)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

def _add_chunk(size_map: SizeMap, chunk: Sequence[FileRecord], verbose: bool) -> int:
    for rec in chunk:
        keys = size_map.add_file(rec)
        if verbose:
            for k in keys:
                log.debug("key: %s (+%d)", k, rec.size)
    return len(chunk)

def aggregate(files: Sequence[FileRecord],
              root: str,
              executor: Executor,
              chunk_size: int = DEFAULT_CHUNK_SIZE,
              verbose: bool = False) -> Mapping[str, int]:
    """Roll every file size up into its ancestors, chunks in parallel."""
    with SizeMap(root) as size_map:
        chunks = [files[i:i + chunk_size] for i in range(0, len(files), chunk_size)]
        done = sum(executor.map(lambda c: _add_chunk(size_map, c, verbose), chunks))
        log.info("aggregated %d files into %d keys", done, len(size_map))
    return size_map.snapshot()
