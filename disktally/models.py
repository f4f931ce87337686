from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping

from .utils import format_bytes

@dataclass(frozen=True)
class FileRecord:
    path: str
    size: int = 0

    def __str__(self) -> str:
        return f"{format_bytes(self.size):>16} - {self.path}"

@dataclass
class ScanResult:
    root: str                       # normalized root key
    sizes: Mapping[str, int]        # key -> rolled-up bytes, read-only
    files: int
    deferred_dirs: int
    elapsed_sec: float = 0.0

    @property
    def total_bytes(self) -> int:
        return self.sizes.get(self.root, 0)
