"""Depth-first tree walker for fswalk.

The walker visits every entry reachable from a root in lexical order,
calling a pre-visitor before descending into a node and a post-visitor
once a directory's whole subtree has been processed.

Visitor protocol
----------------
``visit(path, entry, err)`` is called once per node with ``err=None``.
For a directory whose listing fails it is called a second time with the
OSError from ``read_dir``. If ``stat`` fails on the root it is called once
with ``entry=None`` and the OSError.

``done(path, entry)`` is called once per directory, after every child
subtree has finished.

Both return ``None`` to carry on, ``SKIP_DIR`` to skip, or an exception
instance to abort the walk. Raising works too: ``SkipDir`` means skip and
anything else aborts the walk unchanged.
"""

import logging
from typing import Callable, Iterator, List, Optional, Union

from ..config import SkipScope, WalkConfig
from ..errors import SkipDir, is_skip
from .entry import DirEntry, StatDirEntry
from .filesystem import FileSystem

logger = logging.getLogger(__name__)

VisitResult = Optional[Union[SkipDir, BaseException]]
WalkFunc = Callable[[str, Optional[DirEntry], Optional[OSError]], VisitResult]
DoneDirFunc = Callable[[str, DirEntry], VisitResult]


def _entry_key(entry: DirEntry) -> bytes:
    """Sort key giving byte-wise order, undecodable names included."""
    return entry.name.encode("utf-8", "surrogateescape")


class _Frame:
    """A directory whose children are being walked."""

    __slots__ = ('path', 'entry', 'children')

    def __init__(self, path: str, entry: DirEntry, children: Iterator[DirEntry]):
        self.path = path
        self.entry = entry
        self.children = children


class TreeWalker:
    """Walks a FileSystem depth-first with a pre/post visitor pair.

    Recursion is replaced by an explicit stack of directory frames, so the
    depth of a tree is not bounded by Python's recursion limit. Only the
    listing of each directory on the current path is held in memory.

    Example:
        walker = TreeWalker(OSFileSystem(), visit, done)
        walker.walk("/srv/data")
    """

    def __init__(self,
                 fs: FileSystem,
                 visit: WalkFunc,
                 done: Optional[DoneDirFunc] = None,
                 config: Optional[WalkConfig] = None):
        """Initialize the walker.

        Args:
            fs: File-system collaborator to walk
            visit: Pre-visitor called for every node
            done: Post-visitor called for every fully walked directory
            config: Walk configuration (defaults to WalkConfig())

        Raises:
            TypeError: If a visitor is not callable
            WalkConfigError: If the configuration is invalid
        """
        if not callable(visit):
            raise TypeError("visit must be callable")
        if done is not None and not callable(done):
            raise TypeError("done must be callable or None")

        self.fs = fs
        self.visit = visit
        self.done = done
        self.config = (config or WalkConfig()).ensure_valid()

    def walk(self, root: str) -> None:
        """Walk the tree rooted at root.

        If root is a symbolic link its target is walked. Links found
        further down are reported as entries but never followed.

        Args:
            root: Non-empty path of the file or directory to start from

        Raises:
            ValueError: If root is empty
            Exception: The first error produced by a visitor or by the
                file system, unchanged
        """
        if not root:
            raise ValueError("root must be a non-empty path")

        try:
            info = self.fs.stat(root)
        except OSError as exc:
            logger.debug("stat failed for root %r: %s", root, exc)
            # A skip here just means nothing was walked
            self._call(self.visit, root, None, exc)
            return

        self._walk_tree(root, StatDirEntry(info))

    def _walk_tree(self, root: str, entry: DirEntry) -> None:
        stack: List[_Frame] = []

        if self._enter(root, entry, stack):
            return

        while stack:
            frame = stack[-1]
            child = next(frame.children, None)

            if child is not None:
                origin = self.fs.join(frame.path, child.name)
                escaped = self._enter(origin, child, stack)
            else:
                stack.pop()
                origin = frame.path
                escaped = self.done is not None and self._call(self.done, frame.path, frame.entry)

            if escaped:
                self._unwind(stack, origin)

    def _enter(self, path: str, entry: DirEntry, stack: List[_Frame]) -> bool:
        """Pre-visit a node and, for a directory, push its frame.

        Returns:
            True if a skip signal escaped this node
        """
        is_dir = entry.is_dir()

        if self._call(self.visit, path, entry, None):
            if is_dir:
                logger.debug("skipping directory %r", path)
                return False
            return True

        if not is_dir:
            return False

        try:
            children = self.fs.read_dir(path)
        except OSError as exc:
            logger.debug("read_dir failed for %r: %s", path, exc)
            if self._call(self.visit, path, entry, exc):
                return True
            children = []

        if self.config.sort_entries:
            children = sorted(children, key=_entry_key)

        stack.append(_Frame(path, entry, iter(children)))
        return False

    def _unwind(self, stack: List[_Frame], origin: str) -> None:
        """Apply a skip signal that escaped the node at origin.

        The directory the signal reaches is not post-visited under either
        SkipScope.
        """
        if self.config.skip_scope is SkipScope.WALK:
            logger.debug("skip signal from %r ends the walk", origin)
            stack.clear()
        elif stack:
            abandoned = stack.pop()
            logger.debug("skip signal from %r abandons the rest of %r", origin, abandoned.path)

    @staticmethod
    def _call(fn: Callable[..., VisitResult], *args) -> bool:
        """Invoke a visitor and classify its result.

        Returns:
            True for a skip signal, False for None

        Raises:
            The exception the visitor returned or raised
            TypeError: If the visitor returned anything else
        """
        try:
            result = fn(*args)
        except SkipDir:
            return True

        if result is None:
            return False
        if is_skip(result):
            return True
        if isinstance(result, BaseException):
            raise result
        raise TypeError(
            f"visitor returned {result!r}; expected None, SKIP_DIR or an exception"
        )


def walk_dir(fs: FileSystem,
             root: str,
             visit: WalkFunc,
             done: Optional[DoneDirFunc] = None,
             config: Optional[WalkConfig] = None) -> None:
    """Walk the file tree rooted at root, calling visit and done.

    Entries are walked in lexical order, which makes the output
    deterministic but means each directory is read fully into memory
    before it is walked.

    Args:
        fs: File-system collaborator to walk
        root: Non-empty path of the file or directory to start from
        visit: Pre-visitor, see the module docstring
        done: Post-visitor, see the module docstring
        config: Walk configuration

    Raises:
        The first error produced by a visitor or by the file system.
        Returns normally when the walk completed or was ended by a skip.

    Example:
        >>> def visit(path, entry, err):
        ...     if err is not None:
        ...         return err
        ...     print(path)
        >>> walk_dir(OSFileSystem(), "project", visit)
    """
    TreeWalker(fs, visit, done, config).walk(root)
