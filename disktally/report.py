from __future__ import annotations
import sys
from typing import List, Mapping, Optional, TextIO

from .utils import format_bytes

def render_lines(sizes: Mapping[str, int]) -> List[str]:
    return [f"{format_bytes(sizes[k])} {k}" for k in sorted(sizes)]

def print_report(sizes: Mapping[str, int], stream: Optional[TextIO] = None) -> int:
    out = stream or sys.stdout
    lines = render_lines(sizes)
    for line in lines:
        out.write(line + "\n")
    out.flush()
    return len(lines)
