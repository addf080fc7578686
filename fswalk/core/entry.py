"""Entry and metadata abstractions for fswalk.

A DirEntry is intentionally small: a name, a directory flag, the file type
bits and a deferred resolver for full metadata. Entries are produced by a
FileSystem when listing a directory, or synthesized from the root's
metadata when a walk starts.
"""

import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FileInfo:
    """Metadata snapshot for a single path.

    Attributes:
        name: Final path segment
        is_dir: True if the path is a directory
        mode: Full st_mode style bits (type and permissions)
        size: Size in bytes (0 when unknown)
        mtime: Modification time as a Unix timestamp (None when unknown)
    """

    name: str
    is_dir: bool
    mode: int = 0
    size: int = 0
    mtime: Optional[float] = None

    def type(self) -> int:
        """Return only the file type bits of mode."""
        return stat.S_IFMT(self.mode)


class DirEntry(ABC):
    """Abstract entry encountered during a walk."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Final path segment of the entry."""
        pass

    @abstractmethod
    def is_dir(self) -> bool:
        """Check if the entry describes a directory.

        Symbolic links found while listing a directory are never reported
        as directories, even when they point at one.
        """
        pass

    @abstractmethod
    def type(self) -> int:
        """Return the file type bits (stat.S_IFMT) of the entry."""
        pass

    @abstractmethod
    def info(self) -> FileInfo:
        """Resolve full metadata for the entry.

        This may touch the file system and may raise OSError if the entry
        vanished or became inaccessible after the listing.
        """
        pass

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir() else "file"
        return f"{self.__class__.__name__}({self.name!r}, {kind})"


class StatDirEntry(DirEntry):
    """DirEntry synthesized from an already-resolved FileInfo."""

    def __init__(self, info: FileInfo):
        self._info = info

    @property
    def name(self) -> str:
        return self._info.name

    def is_dir(self) -> bool:
        return self._info.is_dir

    def type(self) -> int:
        return self._info.type()

    def info(self) -> FileInfo:
        return self._info
