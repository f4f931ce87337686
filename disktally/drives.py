from __future__ import annotations
import os
from typing import Dict, Optional, Union
import psutil

from .utils import clamp

def default_workers() -> int:
    cpus = psutil.cpu_count(logical=True) or 0
    if cpus <= 0:
        return 4
    return clamp(cpus + 4, 1, 32)

def filesystem_usage(path: str) -> Optional[Dict[str, Union[int, float]]]:
    try:
        u = psutil.disk_usage(os.path.abspath(path))
    except OSError:
        return None
    return {
        "total": int(u.total),
        "used": int(u.used),
        "free": int(u.free),
        "percent": float(u.percent),
    }
