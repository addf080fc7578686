"""Operating-system file system adapter for fswalk.

Backs the FileSystem abstraction with os.stat and os.scandir.
"""

import os
import stat as stat_module  # To avoid name collision with FileSystem.stat
from typing import List

from ..core.entry import DirEntry, FileInfo
from ..core.filesystem import FileSystem


def _info_from_stat(name: str, st: os.stat_result) -> FileInfo:
    """Build a FileInfo from a stat result."""
    return FileInfo(
        name=name,
        is_dir=stat_module.S_ISDIR(st.st_mode),
        mode=st.st_mode,
        size=st.st_size,
        mtime=st.st_mtime,
    )


class OSDirEntry(DirEntry):
    """Entry backed by an os.DirEntry from os.scandir.

    Type checks never follow symbolic links, so a link to a directory is
    reported as a non-directory and the walker does not descend into it.
    """

    def __init__(self, entry: os.DirEntry):
        self._entry = entry

    @property
    def name(self) -> str:
        return self._entry.name

    @property
    def path(self) -> str:
        """Full path as produced by os.scandir."""
        return self._entry.path

    def is_dir(self) -> bool:
        try:
            return self._entry.is_dir(follow_symlinks=False)
        except OSError:
            # Entry vanished between listing and the type check
            return False

    def type(self) -> int:
        try:
            if self._entry.is_symlink():
                return stat_module.S_IFLNK
            if self._entry.is_dir(follow_symlinks=False):
                return stat_module.S_IFDIR
            if self._entry.is_file(follow_symlinks=False):
                return stat_module.S_IFREG
            return stat_module.S_IFMT(self._entry.stat(follow_symlinks=False).st_mode)
        except OSError:
            return 0

    def info(self) -> FileInfo:
        """Resolve metadata without following a symbolic link."""
        return _info_from_stat(self._entry.name, self._entry.stat(follow_symlinks=False))


class OSFileSystem(FileSystem):
    """FileSystem over the local operating system.

    Paths are joined with os.sep. Listings are fully read and sorted by
    the raw bytes of each name before they are returned, so undecodable
    names keep their byte-wise place.
    """

    sep = os.sep

    def stat(self, path: str) -> FileInfo:
        """Stat a path, following a symbolic link to its target."""
        st = os.stat(path)
        name = os.path.basename(path.rstrip(self.sep)) or path
        return _info_from_stat(name, st)

    def read_dir(self, path: str) -> List[DirEntry]:
        """List a directory with os.scandir, sorted by name."""
        with os.scandir(path) as it:
            entries = [OSDirEntry(entry) for entry in it]
        entries.sort(key=lambda entry: os.fsencode(entry.name))
        return entries

    def __repr__(self) -> str:
        return f"OSFileSystem(sep={self.sep!r})"
