from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

DEFAULT_EAGER_DEPTH = 3     # levels probed during partitioning; deeper dirs become leaf roots
DEFAULT_MAX_BATCHES = 16
DEFAULT_CHUNK_SIZE = 64     # files per aggregation chunk

@dataclass(frozen=True)
class ScanConfig:
    eager_depth: int = DEFAULT_EAGER_DEPTH
    max_batches: int = DEFAULT_MAX_BATCHES
    chunk_size: int = DEFAULT_CHUNK_SIZE
    workers: Optional[int] = None   # None -> drives.default_workers()
    follow_symlinks: bool = False
    verbose: bool = False

    def __post_init__(self):
        if self.eager_depth < 0:
            raise ValueError(f"eager_depth must be >= 0, got {self.eager_depth}")
        if self.max_batches < 1:
            raise ValueError(f"max_batches must be >= 1, got {self.max_batches}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
