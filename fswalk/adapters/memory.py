"""In-memory file system adapter for fswalk.

MemoryFileSystem holds a tree built from nested dicts. It is deterministic
and lets callers inject stat and listing failures, which makes it the
natural collaborator for tests and dry runs.

Example:
    fs = MemoryFileSystem({
        "root": {
            "a.txt": "hello",
            "sub": {"b.txt": b"\\x00\\x01"},
            "link": Symlink("root/sub"),
        }
    })
    fs.fail_read_dir_on("root/sub")
"""

import errno
import os
import stat as stat_module
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from ..core.entry import DirEntry, FileInfo
from ..core.filesystem import FileSystem

# Limit on chained symbolic links before ELOOP
MAX_LINK_HOPS = 40


class Symlink(NamedTuple):
    """Symbolic link node; target is a path inside the same MemoryFileSystem."""
    target: str


def _name_key(name: str) -> bytes:
    return name.encode("utf-8", "surrogateescape")


def _node_mode(node: Any) -> int:
    if isinstance(node, dict):
        return stat_module.S_IFDIR | 0o755
    if isinstance(node, Symlink):
        return stat_module.S_IFLNK | 0o777
    return stat_module.S_IFREG | 0o644


def _node_size(node: Any) -> int:
    if isinstance(node, (str, bytes)):
        return len(node)
    if isinstance(node, Symlink):
        return len(node.target)
    return 0


def _node_info(name: str, node: Any) -> FileInfo:
    return FileInfo(
        name=name,
        is_dir=isinstance(node, dict),
        mode=_node_mode(node),
        size=_node_size(node),
    )


class MemoryDirEntry(DirEntry):
    """Entry for a node of a MemoryFileSystem, captured at listing time."""

    def __init__(self, name: str, node: Any):
        self._name = name
        self._node = node

    @property
    def name(self) -> str:
        return self._name

    def is_dir(self) -> bool:
        return isinstance(self._node, dict)

    def type(self) -> int:
        return stat_module.S_IFMT(_node_mode(self._node))

    def info(self) -> FileInfo:
        return _node_info(self._name, self._node)


class MemoryFileSystem(FileSystem):
    """FileSystem over an in-memory tree of nested dicts.

    A dict is a directory, str or bytes is a file, and a Symlink is a link.
    Paths are split on sep; empty and "." segments are ignored, so "." and
    "" both name the top level of the tree.

    Every stat and read_dir call is appended to ``calls`` as a
    ``(method, path)`` tuple.
    """

    def __init__(self, tree: Optional[Dict[str, Any]] = None, sep: str = "/"):
        """Initialize the file system.

        Args:
            tree: Nested dict describing the top-level directory
            sep: Path separator
        """
        self.sep = sep
        self.tree: Dict[str, Any] = tree if tree is not None else {}
        self.calls: List[Tuple[str, str]] = []
        self._stat_failures: Dict[str, OSError] = {}
        self._read_dir_failures: Dict[str, OSError] = {}

    # Failure injection

    def fail_stat_on(self, path: str, error: Optional[OSError] = None) -> OSError:
        """Make stat(path) raise error (FileNotFoundError by default)."""
        if error is None:
            error = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        self._stat_failures[path] = error
        return error

    def fail_read_dir_on(self, path: str, error: Optional[OSError] = None) -> OSError:
        """Make read_dir(path) raise error (PermissionError by default)."""
        if error is None:
            error = PermissionError(errno.EACCES, os.strerror(errno.EACCES), path)
        self._read_dir_failures[path] = error
        return error

    # FileSystem interface

    def stat(self, path: str) -> FileInfo:
        self.calls.append(("stat", path))
        if path in self._stat_failures:
            raise self._stat_failures[path]

        node = self._resolve(path, follow=True)
        segments = self._split(path)
        name = segments[-1] if segments else path
        return _node_info(name, node)

    def read_dir(self, path: str) -> List[DirEntry]:
        self.calls.append(("read_dir", path))
        if path in self._read_dir_failures:
            raise self._read_dir_failures[path]

        node = self._resolve(path, follow=True)
        if not isinstance(node, dict):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
        return [MemoryDirEntry(name, node[name]) for name in sorted(node, key=_name_key)]

    # Mutation helpers

    def add(self, path: str, node: Any) -> None:
        """Create or replace the node at path; the parent must exist."""
        segments = self._split(path)
        if not segments:
            raise ValueError("cannot replace the top-level directory")
        parent = self._resolve(self.sep.join(segments[:-1]), follow=True)
        if not isinstance(parent, dict):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
        parent[segments[-1]] = node

    def remove(self, path: str) -> None:
        """Delete the node at path."""
        segments = self._split(path)
        parent = self._resolve(self.sep.join(segments[:-1]), follow=True)
        try:
            del parent[segments[-1]]
        except (KeyError, TypeError, IndexError):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path) from None

    # Internals

    def _split(self, path: str) -> List[str]:
        return [seg for seg in path.split(self.sep) if seg and seg != "."]

    def _resolve(self, path: str, follow: bool, hops: int = 0) -> Any:
        """Look up the node for path, following links in every segment.

        The final segment is only followed when follow is True.
        """
        node: Any = self.tree
        segments = self._split(path)
        for index, segment in enumerate(segments):
            if not isinstance(node, dict) or segment not in node:
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
            node = node[segment]
            last = index == len(segments) - 1
            if isinstance(node, Symlink) and (follow or not last):
                if hops >= MAX_LINK_HOPS:
                    raise OSError(errno.ELOOP, os.strerror(errno.ELOOP), path)
                node = self._resolve(node.target, follow=True, hops=hops + 1)
        return node

    def __repr__(self) -> str:
        return f"MemoryFileSystem(top_level={sorted(self.tree)!r})"
