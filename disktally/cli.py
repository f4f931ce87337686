from __future__ import annotations
import argparse
import logging
from typing import List, Optional

from .config import DEFAULT_CHUNK_SIZE, DEFAULT_EAGER_DEPTH, DEFAULT_MAX_BATCHES, ScanConfig
from .console import ConsoleSink
from .engine import calculate
from .report import print_report

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="disktally",
        description="Report the cumulative size of every file and directory under a folder.")
    parser.add_argument("folder", help="Root folder to scan.")
    parser.add_argument("--depth", type=int, default=DEFAULT_EAGER_DEPTH,
                        help="Directory levels listed before handing subtrees to batch workers.")
    parser.add_argument("--batches", type=int, default=DEFAULT_MAX_BATCHES,
                        help="Maximum number of parallel scan batches.")
    parser.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE,
                        help="Files per aggregation chunk.")
    parser.add_argument("--workers", type=int, default=None,
                        help="Thread pool size (default: derived from CPU count).")
    parser.add_argument("--follow-symlinks", action="store_true",
                        help="Follow symbolic links (no cycle detection).")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every file record and rolled-up key.")
    return parser.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    config = ScanConfig(eager_depth=args.depth, max_batches=args.batches,
                        chunk_size=args.chunk_size, workers=args.workers,
                        follow_symlinks=args.follow_symlinks, verbose=args.verbose)
    with ConsoleSink(level=logging.DEBUG if args.verbose else logging.INFO) as sink:
        result = calculate(args.folder, config)
        # diagnostics first, then the report on stdout
        sink.drain()
        print_report(result.sizes)
