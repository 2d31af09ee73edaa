"""Custom exceptions for git-worktree-manager

Every error carries a user-facing message; ``str(error)`` is exactly what a
front end displays and what the JSON command bridge sends back.
"""

import json
from typing import Optional, Sequence


class WorktreeManagerError(Exception):
    """Base exception for all git-worktree-manager errors."""

    def to_json(self) -> str:
        """Serialize the error the way the UI expects it: a bare JSON string."""
        return json.dumps(str(self))


class GitLibraryError(WorktreeManagerError):
    """Exception raised when a call into the git library binding fails."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Git error: {message}")


class GitIOError(WorktreeManagerError):
    """Exception raised when git cannot be run at all (missing executable, OS error)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"IO error: {message}")


class CommandFailedError(WorktreeManagerError):
    """Exception raised when a git command exits with a non-zero status."""

    def __init__(
        self,
        stderr: str,
        command: Optional[Sequence[str]] = None,
        status: Optional[int] = None,
    ):
        self.stderr = stderr
        self.command = list(command) if command else []
        self.status = status
        super().__init__(f"Command failed: {stderr}")


class InvalidPathError(WorktreeManagerError):
    """Exception raised for paths that are missing or of the wrong kind."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Invalid path: {message}")


class NotARepositoryError(WorktreeManagerError):
    """Exception raised when a path is not a git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class UncommittedChangesError(WorktreeManagerError):
    """Exception raised when removing a worktree that still has changes."""

    def __init__(self):
        super().__init__("Worktree has uncommitted changes")


class WorktreeLockedError(WorktreeManagerError):
    """Exception raised when an operation is refused because a worktree is locked."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Worktree is locked: {reason}")


class BranchInUseError(WorktreeManagerError):
    """Exception raised when a branch is already checked out by another worktree."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Branch already checked out in another worktree: {branch}")


class WorktreeNotFoundError(WorktreeManagerError):
    """Exception raised when a path is not one of the repository's worktrees."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Worktree not found: {path}")


class UnknownCommandError(WorktreeManagerError):
    """Exception raised by the command bridge for an unregistered command name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown command: {name}")
