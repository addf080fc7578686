"""High-level API for fswalk.

Simple functional interfaces over TreeWalker for the common cases.
"""

import os
from typing import List, Optional, Union

from .adapters.filesystem import OSFileSystem
from .config import WalkConfig
from .core.filesystem import FileSystem
from .core.walker import DoneDirFunc, WalkFunc, walk_dir
from .visitors import ErrorPolicy, WalkRecorder


def walk(root: Union[str, "os.PathLike[str]"],
         visit: WalkFunc,
         done: Optional[DoneDirFunc] = None,
         config: Optional[WalkConfig] = None) -> None:
    """Walk a directory tree on the local file system.

    Args:
        root: Path of the file or directory to start from
        visit: Pre-visitor called for every node
        done: Post-visitor called for every fully walked directory
        config: Walk configuration

    Example:
        >>> def visit(path, entry, err):
        ...     if err is not None:
        ...         return err
        ...     if entry.is_dir() and entry.name == ".git":
        ...         return SKIP_DIR
        ...     print(path)
        >>> walk("project", visit)
    """
    walk_dir(OSFileSystem(), os.fspath(root), visit, done, config)


def walk_paths(fs: FileSystem,
               root: str,
               config: Optional[WalkConfig] = None,
               policy: Optional[ErrorPolicy] = None) -> List[str]:
    """Return every path under root in pre-visit order.

    Args:
        fs: File system to walk
        root: Path to start from
        config: Walk configuration
        policy: Policy for stat and listing errors (fail fast by default)

    Returns:
        List of paths, root first
    """
    recorder = WalkRecorder(policy=policy)
    walk_dir(fs, root, recorder.visit, recorder.done, config)
    return recorder.pre
