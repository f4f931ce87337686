from __future__ import annotations
import errno
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .aggregator import aggregate
from .config import ScanConfig
from .drives import default_workers, filesystem_usage
from .models import ScanResult
from .partitioner import partition
from .scanner import scan_all
from .utils import format_bytes, root_key

log = logging.getLogger(__name__)

def _took(t0: float) -> str:
    return f"{time.perf_counter() - t0:.3f}s"

def calculate(root: str, config: Optional[ScanConfig] = None) -> ScanResult:
    """Scan `root` once and roll every file size up into its ancestors.

    Three phases, each fully joined before the next: partition the first
    levels, scan the leaf roots in batches, aggregate the sorted file list.
    """
    config = config or ScanConfig()
    t0 = time.perf_counter()
    root = os.path.abspath(root)
    if not os.path.exists(root):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), root)
    if not os.path.isdir(root):
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), root)

    workers = config.workers or default_workers()
    log.info("START, folder: %s, workers: %d", root, workers)
    usage = filesystem_usage(root)
    if usage:
        log.info("filesystem: %s used of %s (%.1f%%)",
                 format_bytes(usage["used"]), format_bytes(usage["total"]), usage["percent"])

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="disktally") as ex:
        t = time.perf_counter()
        eager, deferred = partition(root, ex, depth=config.eager_depth,
                                    follow_symlinks=config.follow_symlinks)
        log.info("partition DONE: %d eager files, %d leaf roots, took: %s",
                 len(eager), len(deferred), _took(t))

        t = time.perf_counter()
        deep = scan_all(deferred, ex, max_batches=config.max_batches,
                        follow_symlinks=config.follow_symlinks)
        log.info("scan DONE: %d files, took: %s", len(deep), _took(t))

        files = sorted(eager + deep, key=lambda r: r.path)
        if config.verbose:
            for rec in files:
                log.debug("file: %s", rec)

        t = time.perf_counter()
        sizes = aggregate(files, root, ex, chunk_size=config.chunk_size, verbose=config.verbose)
        log.info("aggregate DONE: %d keys, took: %s", len(sizes), _took(t))

    elapsed = time.perf_counter() - t0
    log.info("DONE, folder: %s, took: %.3fs", root, elapsed)
    return ScanResult(root=root_key(root), sizes=sizes, files=len(files),
                      deferred_dirs=len(deferred), elapsed_sec=elapsed)
