"""Configuration system for fswalk.

This module defines how callers tune a walk. The defaults reproduce the
documented behavior, so most callers never construct a WalkConfig.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from .errors import WalkConfigError


class SkipScope(Enum):
    """How far a skip signal travels once it escapes its own directory.

    A skip returned for a directory always prunes just that directory.
    These values govern every other skip: one returned for a non-directory,
    one returned by the second (listing error) visit, and one returned by
    the post-visitor.

    Under neither value does the enclosing directory's post-visitor run:
    a skip that reaches a parent's loop means that directory was not
    walked to completion.
    """
    WALK = "walk"       # Unwind the whole walk, reported as success
    PARENT = "parent"   # Abandon the enclosing directory, resume with its next sibling


@dataclass
class WalkConfig:
    """Complete configuration for a walk."""

    # Skip propagation
    skip_scope: SkipScope = SkipScope.WALK

    # Re-sort each listing by name instead of trusting the collaborator
    sort_entries: bool = True

    @classmethod
    def fs_walkdir(cls) -> 'WalkConfig':
        """Create config matching the classic fs.WalkDir skip behavior.

        A skip returned for a file abandons the rest of its parent
        directory (without the parent's post-visit) and the walk goes on.

        Returns:
            WalkConfig with SkipScope.PARENT
        """
        return cls(skip_scope=SkipScope.PARENT)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.skip_scope, SkipScope):
            errors.append(f"skip_scope must be a SkipScope, got {self.skip_scope!r}")

        if not isinstance(self.sort_entries, bool):
            errors.append("sort_entries must be a bool")

        return errors

    def ensure_valid(self) -> 'WalkConfig':
        """Raise WalkConfigError if validate() reports any problem."""
        errors = self.validate()
        if errors:
            raise WalkConfigError("; ".join(errors))
        return self
