"""
Visitor helpers and error policies for fswalk.

The walker never logs, retries or swallows anything on its own: every
OSError it meets is handed to the pre-visitor, whose answer is final. This
module provides ready-made answers through the Policy pattern, plus a
recording visitor pair useful for comparing walks.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Collection, List, Optional, Tuple

from .core.entry import DirEntry
from .core.walker import VisitResult
from .errors import SKIP_DIR

logger = logging.getLogger(__name__)


def _phase(entry: Optional[DirEntry]) -> str:
    """Name the walk phase an error was delivered in."""
    return "stat" if entry is None else "read_dir"


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    A policy receives the arguments of a pre-visitor call whose ``err`` is
    set and returns what the visitor should return.
    """

    @abstractmethod
    def handle(self, path: str, entry: Optional[DirEntry], error: OSError) -> VisitResult:
        """
        Decide what to do with an error delivered by the walker.

        Args:
            path: Path the error relates to
            entry: Entry for the path, or None when stat failed on the root
            error: The OSError from stat or read_dir

        Returns:
            None to continue (with zero children for a listing error),
            or an exception to abort the walk.
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that aborts the walk on any error.

    This is the default behavior - any error will halt the entire walk.
    """

    def handle(self, path: str, entry: Optional[DirEntry], error: OSError) -> VisitResult:
        """Return the error unchanged."""
        return error


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all errors silently and continues.

    A root that cannot be stat'ed yields an empty walk; a directory that
    cannot be listed is treated as empty.
    """

    def __init__(self):
        """Initialize the policy."""
        self.errors: List[dict] = []
        self.skipped_paths: List[str] = []

    def handle(self, path: str, entry: Optional[DirEntry], error: OSError) -> VisitResult:
        """Record the error and continue."""
        self._record(path, entry, error)
        return None

    def _record(self, path: str, entry: Optional[DirEntry], error: OSError) -> None:
        self.errors.append({
            'path': path,
            'phase': _phase(entry),
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        self.skipped_paths.append(path)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'permission_errors': sum(1 for e in self.errors if e['error_type'] == 'PermissionError'),
            'not_found_errors': sum(1 for e in self.errors if e['error_type'] == 'FileNotFoundError'),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }


class ContinueOnErrorsPolicy(CollectErrorsPolicy):
    """
    Policy that logs errors and continues the walk.

    Same outcome as CollectErrorsPolicy, with a warning logged for every
    error when verbose is set.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning when an error occurs
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, path: str, entry: Optional[DirEntry], error: OSError) -> VisitResult:
        self._record(path, entry, error)
        if self.verbose:
            if isinstance(error, PermissionError):
                logger.warning("Skipping inaccessible path %r: %s", path, error)
            else:
                logger.warning("Error in %s for %r: %s", _phase(entry), path, error)
        return None


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that tolerates errors up to a threshold, then aborts.

    Useful when some errors are expected but too many indicate
    a systemic problem that should halt the walk.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before aborting
            verbose: If True, log a warning for each tolerated error
        """
        if max_errors < 0:
            raise ValueError("max_errors cannot be negative")
        self.max_errors = max_errors
        self.verbose = verbose
        self.errors: List[OSError] = []

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def handle(self, path: str, entry: Optional[DirEntry], error: OSError) -> VisitResult:
        """Continue while under the threshold, otherwise abort."""
        self.errors.append(error)

        if self.error_count > self.max_errors:
            exc = RuntimeError(f"Error threshold exceeded ({self.max_errors} errors)")
            exc.__cause__ = error
            return exc

        if self.verbose:
            logger.warning("[%d/%d] Error in %s for %r: %s",
                           self.error_count, self.max_errors, _phase(entry), path, error)
        return None


class PolicyVisitor:
    """
    Pre-visitor that routes delivered errors through an ErrorPolicy.

    Calls without an error go to on_entry, if given.

    Example:
        policy = ContinueOnErrorsPolicy(verbose=False)
        walk_dir(fs, "root", PolicyVisitor(print_entry, policy))
        print(policy.get_statistics())
    """

    def __init__(self,
                 on_entry: Optional[Callable[[str, DirEntry], VisitResult]] = None,
                 policy: Optional[ErrorPolicy] = None):
        self.on_entry = on_entry
        self.policy = policy or FailFastPolicy()

    def __call__(self, path: str, entry: Optional[DirEntry], err: Optional[OSError]) -> VisitResult:
        if err is not None:
            return self.policy.handle(path, entry, err)
        if self.on_entry is None:
            return None
        return self.on_entry(path, entry)


class WalkRecorder:
    """Visitor pair that records every visit in order.

    Pass ``recorder.visit`` and ``recorder.done`` to the walker. Two walks
    of the same tree produce identical ``events``, so recorders can be
    compared directly.

    Attributes:
        pre: Paths in pre-visit order (error calls excluded)
        post: Directory paths in post-visit order
        errors: (path, error) pairs delivered to the pre-visitor
        events: ("pre" | "post" | "error", path) tuples in call order
    """

    def __init__(self,
                 skip: Collection[str] = (),
                 policy: Optional[ErrorPolicy] = None):
        """
        Args:
            skip: Paths for which the pre-visitor returns SKIP_DIR
            policy: Policy deciding on delivered errors (FailFastPolicy by default)
        """
        self.skip = set(skip)
        self.policy = policy or FailFastPolicy()
        self.pre: List[str] = []
        self.post: List[str] = []
        self.errors: List[Tuple[str, OSError]] = []
        self.events: List[Tuple[str, str]] = []

    def visit(self, path: str, entry: Optional[DirEntry], err: Optional[OSError]) -> VisitResult:
        if err is not None:
            self.errors.append((path, err))
            self.events.append(("error", path))
            return self.policy.handle(path, entry, err)

        self.pre.append(path)
        self.events.append(("pre", path))
        if path in self.skip:
            return SKIP_DIR
        return None

    def done(self, path: str, entry: DirEntry) -> VisitResult:
        self.post.append(path)
        self.events.append(("post", path))
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WalkRecorder):
            return NotImplemented
        return self.events == other.events

    __hash__ = None

    def __repr__(self) -> str:
        return f"WalkRecorder(pre={len(self.pre)}, post={len(self.post)}, errors={len(self.errors)})"
