"""Working tree status models and related enums"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class FileState(Enum):
    """Label describing how a file differs from HEAD or the index."""
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    TYPECHANGE = "typechange"
    UNTRACKED = "untracked"
    CONFLICTED = "conflicted"


@dataclass(frozen=True)
class FileStatus:
    """One changed path. A file with staged and unstaged changes appears twice."""
    path: str
    status: FileState
    staged: bool

    def to_dict(self) -> dict:
        return {"path": self.path, "status": self.status.value, "staged": self.staged}


@dataclass(frozen=True)
class GitStatusResult:
    """Status summary of a single worktree."""
    branch: Optional[str]
    files: List[FileStatus] = field(default_factory=list)
    ahead: int = 0  # Both stay 0 when there is no upstream
    behind: int = 0

    @property
    def is_clean(self) -> bool:
        return not self.files

    @property
    def staged_files(self) -> List[FileStatus]:
        return [f for f in self.files if f.staged]

    @property
    def unstaged_files(self) -> List[FileStatus]:
        return [f for f in self.files if not f.staged]

    def to_dict(self) -> dict:
        return {
            "branch": self.branch,
            "files": [f.to_dict() for f in self.files],
            "ahead": self.ahead,
            "behind": self.behind,
        }
