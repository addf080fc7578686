"""Core abstractions for fswalk.

This module contains the entry and file system abstractions and the
walker that consumes them.
"""

from .entry import DirEntry, FileInfo, StatDirEntry
from .filesystem import FileSystem
from .walker import TreeWalker, walk_dir, WalkFunc, DoneDirFunc

__all__ = [
    "DirEntry",
    "FileInfo",
    "StatDirEntry",
    "FileSystem",
    "TreeWalker",
    "walk_dir",
    "WalkFunc",
    "DoneDirFunc",
]
