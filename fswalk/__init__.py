"""fswalk - Deterministic depth-first file tree walking.

fswalk visits every file and directory under a root in lexical order over
a pluggable FileSystem, calling a pre-visitor before descending into each
node and a post-visitor once each directory's subtree is complete.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Local file system:
    from fswalk import walk, SKIP_DIR

Any FileSystem:
    from fswalk import walk_dir, MemoryFileSystem
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .errors import SkipDir, SKIP_DIR, is_skip, WalkConfigError
from .config import WalkConfig, SkipScope
from .core import (
    DirEntry,
    FileInfo,
    StatDirEntry,
    FileSystem,
    TreeWalker,
    walk_dir,
    WalkFunc,
    DoneDirFunc,
)
from .adapters import (
    OSFileSystem,
    OSDirEntry,
    MemoryFileSystem,
    MemoryDirEntry,
    Symlink,
)
from .visitors import (
    ErrorPolicy,
    FailFastPolicy,
    CollectErrorsPolicy,
    ContinueOnErrorsPolicy,
    ThresholdPolicy,
    PolicyVisitor,
    WalkRecorder,
)
from .api import walk, walk_paths

__all__ = [
    "__version__",
    # Signals and errors
    "SkipDir",
    "SKIP_DIR",
    "is_skip",
    "WalkConfigError",
    # Config
    "WalkConfig",
    "SkipScope",
    # Core
    "DirEntry",
    "FileInfo",
    "StatDirEntry",
    "FileSystem",
    "TreeWalker",
    "walk_dir",
    "WalkFunc",
    "DoneDirFunc",
    # Adapters
    "OSFileSystem",
    "OSDirEntry",
    "MemoryFileSystem",
    "MemoryDirEntry",
    "Symlink",
    # Visitors
    "ErrorPolicy",
    "FailFastPolicy",
    "CollectErrorsPolicy",
    "ContinueOnErrorsPolicy",
    "ThresholdPolicy",
    "PolicyVisitor",
    "WalkRecorder",
    # API
    "walk",
    "walk_paths",
]
