"""File system adapters for fswalk."""

from .filesystem import OSFileSystem, OSDirEntry
from .memory import MemoryFileSystem, MemoryDirEntry, Symlink

__all__ = [
    'OSFileSystem',
    'OSDirEntry',
    'MemoryFileSystem',
    'MemoryDirEntry',
    'Symlink',
]
