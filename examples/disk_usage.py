#!/usr/bin/env python
"""
Disk usage with fswalk
======================

Sums file sizes per directory using the post-visitor, which only fires
once a directory's whole subtree is done. Unreadable directories, and
files whose metadata can no longer be read, are logged and counted as
empty.

Usage:
    python examples/disk_usage.py [ROOT]
"""

import logging
import sys
from collections import defaultdict

from fswalk import (SKIP_DIR, ContinueOnErrorsPolicy, OSFileSystem,
                    PolicyVisitor, walk_dir)

SKIPPED_DIRS = (".git", "__pycache__")


def disk_usage(fs, root, policy=None, report=None):
    """Return a dict mapping each walked directory to its total size.

    Args:
        fs: FileSystem to walk
        root: Directory to start from
        policy: ErrorPolicy for unreadable paths (ContinueOnErrorsPolicy if None)
        report: Optional callable(path, total) called as each directory finishes
    """
    totals = defaultdict(int)
    if policy is None:
        policy = ContinueOnErrorsPolicy()

    def parent_of(path, entry):
        head = path[:len(path) - len(entry.name)]
        return head if head == root else head[:-len(fs.sep)]

    def on_entry(path, entry):
        if entry.is_dir():
            if entry.name in SKIPPED_DIRS:
                return SKIP_DIR
            return None
        try:
            size = entry.info().size
        except OSError as exc:
            # Removed or replaced since the listing
            return policy.handle(path, entry, exc)
        totals[parent_of(path, entry)] += size

    def done(path, entry):
        if path != root:
            totals[parent_of(path, entry)] += totals[path]
        if report is not None:
            report(path, totals[path])

    walk_dir(fs, root, PolicyVisitor(on_entry, policy), done)
    return dict(totals)


def main(root: str) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")

    policy = ContinueOnErrorsPolicy()
    disk_usage(OSFileSystem(), root, policy,
               report=lambda path, total: print(f"{total:>12,}  {path}"))

    stats = policy.get_statistics()
    if stats['total_errors']:
        print(f"\n{stats['total_errors']} paths could not be read", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else "."))
