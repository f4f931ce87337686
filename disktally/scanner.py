from __future__ import annotations
import logging
import math
from concurrent.futures import Executor
from functools import partial
from typing import Iterator, List, Sequence

from .config import DEFAULT_MAX_BATCHES
from .models import FileRecord
from .prober import list_immediate

log = logging.getLogger(__name__)

def make_batches(dirs: Sequence[str], max_batches: int = DEFAULT_MAX_BATCHES) -> List[List[str]]:
    """Sort `dirs` and cut them into at most `max_batches` contiguous batches."""
    ordered = sorted(dirs)
    count = len(ordered)
    if count == 0:
        return []
    bs = max(1, math.ceil(count / min(max_batches, count)))
    return [ordered[i:i + bs] for i in range(0, count, bs)]

def iter_tree(dir_path: str, follow_symlinks: bool = False) -> Iterator[FileRecord]:
    # explicit stack: depth is bounded by the filesystem, not the interpreter
    stack = [dir_path]
    while stack:
        current = stack.pop()
        files, subdirs = list_immediate(current, follow_symlinks=follow_symlinks)
        yield from files
        stack.extend(subdirs)

def scan_batch(batch: Sequence[str], follow_symlinks: bool = False) -> List[FileRecord]:
    out: List[FileRecord] = []
    for d in batch:
        out.extend(iter_tree(d, follow_symlinks=follow_symlinks))
    return out

def scan_all(dirs: Sequence[str],
             executor: Executor,
             max_batches: int = DEFAULT_MAX_BATCHES,
             follow_symlinks: bool = False) -> List[FileRecord]:
    batches = make_batches(dirs, max_batches)
    log.info("scanning %d leaf roots in %d batches", len(dirs), len(batches))
    if not batches:
        return []
    log.debug("batch size: %d", len(batches[0]))
    for batch in batches:
        for d in batch:
            log.debug("leaf root: %s", d)
    found: List[FileRecord] = []
    for records in executor.map(partial(scan_batch, follow_symlinks=follow_symlinks), batches):
        found.extend(records)
    return found
