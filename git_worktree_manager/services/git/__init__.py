"""Git-related services for git-worktree-manager."""

from .runner import GitCommandRunner
from .validation import ValidationService
from .operations import GitOperations
from .worktrees import WorktreeService
from .branches import BranchQueries

__all__ = [
    "GitCommandRunner",
    "ValidationService",
    "GitOperations",
    "WorktreeService",
    "BranchQueries",
]
