from __future__ import annotations
import logging
from concurrent.futures import Executor
from functools import partial
from typing import List, Tuple

from .config import DEFAULT_EAGER_DEPTH
from .models import FileRecord
from .prober import list_immediate

log = logging.getLogger(__name__)

def partition(root: str,
              executor: Executor,
              depth: int = DEFAULT_EAGER_DEPTH,
              follow_symlinks: bool = False) -> Tuple[List[FileRecord], List[str]]:
    """Split the tree under `root` into eagerly listed files and leaf roots.

    Levels 0..depth-1 are probed, siblings in parallel; the directories found
    at `depth` are returned unprobed for the recursive scanner. With depth=0
    the root itself is the only leaf root.
    """
    eager: List[FileRecord] = []
    frontier = [root]
    probe = partial(list_immediate, follow_symlinks=follow_symlinks)
    for level in range(depth):
        if not frontier:
            break
        found: List[str] = []
        for files, subdirs in executor.map(probe, frontier):
            eager.extend(files)
            found.extend(subdirs)
        log.debug("level %d: probed %d dirs, %d files so far, %d subdirs",
                  level, len(frontier), len(eager), len(found))
        frontier = found
    return eager, frontier
