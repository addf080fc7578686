"""Control signals and error types for fswalk.

The walker itself raises no exceptions of its own during a walk: every
failure it reports is either an ``OSError`` from the file-system
collaborator or an error produced by a visitor, propagated unchanged.
"""


class SkipDir(Exception):
    """Skip signal returned (or raised) by a visitor.

    Returned for a directory, it prunes that directory's subtree. Anywhere
    else it is not consumed locally and propagates, see ``SkipScope``.

    Visitors normally return the ``SKIP_DIR`` singleton. Raising ``SkipDir``
    has the same meaning.
    """

    def __init__(self, *args):
        super().__init__(*args or ("skip this directory",))


SKIP_DIR = SkipDir()


def is_skip(value) -> bool:
    """Check whether a visitor result is the skip signal."""
    return isinstance(value, SkipDir)


class WalkConfigError(ValueError):
    """Raised when a WalkConfig fails validation."""
