"""FileSystem abstraction for fswalk.

The FileSystem is the pluggable collaborator the walker consumes. It knows
how to resolve metadata for a path and how to list a directory; the walker
knows nothing else about the storage underneath.
"""

from abc import ABC, abstractmethod
from typing import List

from .entry import DirEntry, FileInfo


class FileSystem(ABC):
    """Abstract collaborator exposing stat and directory listing.

    Implementations report failures by raising OSError (or a subclass such
    as FileNotFoundError or PermissionError). Those are the only failures
    the walker classifies and hands to the pre-visitor; any other exception
    aborts the walk as-is.
    """

    #: Path segment separator used by join()
    sep: str = "/"

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """Return metadata for path, following a symbolic link.

        Args:
            path: Path to resolve

        Returns:
            FileInfo for the path (or for the link target)

        Raises:
            OSError: If the path cannot be resolved
        """
        pass

    @abstractmethod
    def read_dir(self, path: str) -> List[DirEntry]:
        """List the entries of a directory.

        The result is a snapshot taken at listing time, sorted by name.

        Args:
            path: Directory to list

        Returns:
            Entries sorted lexically by name

        Raises:
            OSError: If the directory cannot be opened or read
        """
        pass

    def join(self, parent: str, name: str) -> str:
        """Compose a child path from its parent path and name.

        No normalization happens beyond inserting a single separator.
        A parent that already ends in the separator (such as a root "/")
        is not given a second one.
        """
        if parent.endswith(self.sep):
            return parent + name
        return parent + self.sep + name
