"""Plain data records returned by the services."""

from .branch import BranchInfo
from .repository import RepositoryInfo
from .status import FileState, FileStatus, GitStatusResult
from .worktree import WorktreeInfo

__all__ = [
    "BranchInfo",
    "RepositoryInfo",
    "FileState",
    "FileStatus",
    "GitStatusResult",
    "WorktreeInfo",
]
