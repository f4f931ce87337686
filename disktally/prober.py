from __future__ import annotations
import logging
import os
from typing import List, Tuple

from .models import FileRecord

log = logging.getLogger(__name__)

def _entry_size(entry: os.DirEntry, follow_symlinks: bool) -> int:
    return int(entry.stat(follow_symlinks=follow_symlinks).st_size)

def list_immediate(dir_path: str, follow_symlinks: bool = False) -> Tuple[List[FileRecord], List[str]]:
    """Files and subdirectories directly inside `dir_path`.

    Unreadable entries are logged and left out; a directory that cannot be
    listed at all yields whatever was read before the failure.
    """
    files: List[FileRecord] = []
    subdirs: List[str] = []
    try:
        with os.scandir(dir_path) as it:
            for entry in it:
                try:
                    if entry.is_symlink() and not follow_symlinks:
                        continue
                    if entry.is_dir(follow_symlinks=follow_symlinks):
                        subdirs.append(entry.path)
                    else:
                        files.append(FileRecord(entry.path, _entry_size(entry, follow_symlinks)))
                except OSError as e:
                    log.warning("skipping %s: %s", entry.path, e)
    except OSError as e:
        log.warning("cannot list %s: %s", dir_path, e)
    return files, subdirs
