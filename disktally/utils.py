from __future__ import annotations
from typing import List

UNITS = ["B", "KB", "MB", "GB", "TB"]

def format_bytes(num: int) -> str:
    if num < 0:
        return str(num)
    x = float(num)
    order = 0
    while x >= 1024.0 and order < len(UNITS) - 1:
        x /= 1024.0
        order += 1
    text = f"{x:.2f}".rstrip("0").rstrip(".")
    return f"{text} {UNITS[order]}"

def normalize_keys(path: str) -> List[str]:
    """Cumulative path-prefix keys, shallowest first.

    `/a/b/c.txt` -> ["/a", "/a/b", "/a/b/c.txt"]; backslashes count as
    separators so `C:\\x` -> ["/C:", "/C:/x"].
    """
    keys: List[str] = []
    key = ""
    for part in path.replace("\\", "/").split("/"):
        if not part:
            continue
        key += "/" + part
        keys.append(key)
    return keys

def root_key(path: str) -> str:
    keys = normalize_keys(path)
    return keys[-1] if keys else "/"

def clamp(v, lo, hi):
    return lo if v < lo else hi if v > hi else v
