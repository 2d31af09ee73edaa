"""Worktree data models."""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class WorktreeInfo:
    """Information about a git worktree."""

    path: str
    branch: Optional[str]  # None when HEAD is detached
    is_main: bool  # Is this the main working tree?
    is_locked: bool
    lock_reason: Optional[str] = None
    head: Optional[str] = None  # Commit sha HEAD points at
    is_prunable: bool = False  # Directory missing, metadata can be pruned

    def __str__(self) -> str:
        """String representation of worktree."""
        branch = self.branch or "(detached)"
        main_marker = " (main)" if self.is_main else ""
        locked_marker = " [locked]" if self.is_locked else ""
        return f"{branch} @ {self.path}{main_marker}{locked_marker}"

    def to_dict(self) -> dict:
        return asdict(self)
