"""Worktree operations service for git-worktree-manager."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING, Union

from git_worktree_manager.exceptions import (
    BranchInUseError,
    InvalidPathError,
    UncommittedChangesError,
    WorktreeLockedError,
    WorktreeNotFoundError,
)
from git_worktree_manager.models.worktree import WorktreeInfo
from git_worktree_manager.services.git.runner import GitCommandRunner
from git_worktree_manager.services.git.status_codes import STATUS_ARGS
from git_worktree_manager.services.git.validation import ValidationService
from git_worktree_manager.utils.logging import get_logger

if TYPE_CHECKING:
    from git_worktree_manager.config import Config

logger = get_logger(__name__)


def parse_worktree_list(output: str) -> List[WorktreeInfo]:
    """Parse ``git worktree list --porcelain`` output.

    Format, one block per worktree separated by a blank line::

        worktree /path/to/worktree
        HEAD <sha>
        branch refs/heads/<name>      (or "detached", or "bare")
        locked [<reason>]             (optional)
        prunable [<reason>]           (optional)

    The first block is always the main worktree. A bare main repository is
    dropped from the result since it has no working tree to show.
    """
    worktree_list: List[WorktreeInfo] = []
    block_index = 0
    current: Dict[str, Any] = {}

    def flush():
        nonlocal block_index, current
        if current.get("path"):
            is_main = block_index == 0
            if not (is_main and current.get("bare")):
                worktree_list.append(
                    WorktreeInfo(
                        path=current["path"],
                        branch=current.get("branch"),
                        is_main=is_main,
                        is_locked=current.get("locked", False),
                        lock_reason=current.get("lock_reason"),
                        head=current.get("HEAD"),
                        is_prunable=current.get("prunable", False),
                    )
                )
            block_index += 1
        current = {}

    for line in output.split("\n"):
        line = line.rstrip("\r")

        if not line.strip():
            flush()
            continue

        if line.startswith("worktree "):
            if current:
                flush()
            current["path"] = line.split(" ", 1)[1]
        elif line.startswith("HEAD "):
            current["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith("refs/heads/"):
                current["branch"] = branch_ref[len("refs/heads/"):]
            else:
                current["branch"] = branch_ref
        elif line == "detached":
            current["branch"] = None
        elif line == "bare":
            current["bare"] = True
        elif line.startswith("locked"):
            current["locked"] = True
            if " " in line:
                current["lock_reason"] = line.split(" ", 1)[1]
        elif line.startswith("prunable"):
            current["prunable"] = True

    # Last block when there is no trailing blank line
    flush()

    return worktree_list


class WorktreeService:
    """Service for managing git worktrees."""

    def __init__(self, repo_path: Union[str, Path], config: Optional["Config"] = None):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository
            config: Optional configuration object
        """
        self.repo_path = str(repo_path)
        self.config = config

    def _runner(self) -> GitCommandRunner:
        """Validate the repository and return a runner rooted at it."""
        ValidationService.validate_repository(self.repo_path).close()
        return GitCommandRunner(self.repo_path)

    def _absolute(self, worktree_path: Union[str, Path]) -> Path:
        """Make a worktree path absolute, relative paths being relative to the repository."""
        path = Path(worktree_path).expanduser()
        if not path.is_absolute():
            path = Path(self.repo_path) / path
        return path

    def list_worktrees(self) -> List[WorktreeInfo]:
        """Get information about all worktrees, main worktree first.

        Returns:
            List of WorktreeInfo objects
        """
        output = self._runner().run("worktree", "list", "--porcelain")
        worktree_list = parse_worktree_list(output)

        logger.debug(f"Found {len(worktree_list)} worktrees")
        for wt in worktree_list:
            logger.debug(f"  {wt}")
        return worktree_list

    def find_worktree(self, worktree_path: Union[str, Path]) -> WorktreeInfo:
        """Look up a worktree by path.

        Paths are compared after resolving symlinks.

        Raises:
            WorktreeNotFoundError: The path is not one of this repository's worktrees
        """
        wanted = os.path.realpath(self._absolute(worktree_path))
        for wt in self.list_worktrees():
            if os.path.realpath(wt.path) == wanted:
                return wt
        raise WorktreeNotFoundError(str(worktree_path))

    def get_worktree_branches(self) -> Dict[str, str]:
        """Map each checked-out branch name to the worktree path holding it."""
        return {wt.branch: wt.path for wt in self.list_worktrees() if wt.branch}

    def is_worktree_dirty(self, worktree_path: Union[str, Path]) -> bool:
        """Check for staged, unstaged or untracked changes (ignored files don't count)."""
        status = GitCommandRunner(worktree_path).run(*STATUS_ARGS)
        return bool(status.strip("\0").strip())

    def add_worktree(
        self, worktree_path: Union[str, Path], branch: str, create_branch: bool = False
    ) -> None:
        """Create a new worktree.

        Args:
            worktree_path: Where to create the worktree
            branch: Branch to check out, or the name of the branch to create
            create_branch: Create ``branch`` from HEAD instead of checking out an existing one

        Raises:
            BranchInUseError: The branch is already checked out by another worktree
            CommandFailedError: git refused (path exists, branch exists/unknown, ...)
        """
        runner = self._runner()
        target = str(self._absolute(worktree_path))

        if create_branch:
            runner.run("worktree", "add", "-b", branch, target)
        else:
            in_use = self.get_worktree_branches()
            if branch in in_use:
                logger.warning(f"Branch {branch} is already checked out at {in_use[branch]}")
                raise BranchInUseError(branch)
            runner.run("worktree", "add", target, branch)

        logger.info(f"Created worktree at {target} for branch {branch}")

    def remove_worktree(self, worktree_path: Union[str, Path], force: bool = False) -> None:
        """Remove a linked worktree.

        Args:
            worktree_path: Path of the worktree to remove
            force: Remove even when the worktree is dirty or locked

        Raises:
            WorktreeNotFoundError: Unknown worktree
            InvalidPathError: The path is the main worktree
            WorktreeLockedError: Worktree is locked and force is not set
            UncommittedChangesError: Worktree has changes and force is not set
        """
        runner = self._runner()
        wt = self.find_worktree(worktree_path)
        if wt.is_main:
            raise InvalidPathError(f"Cannot remove the main worktree: {wt.path}")

        if not force:
            if wt.is_locked:
                raise WorktreeLockedError(wt.lock_reason or wt.path)
            # A missing directory has nothing to lose; let git deal with it
            if os.path.isdir(wt.path) and self.is_worktree_dirty(wt.path):
                raise UncommittedChangesError()

        args = ["worktree", "remove"]
        if force:
            args.append("--force")
            if wt.is_locked:
                # git wants the flag twice to remove a locked worktree
                args.append("--force")
        args.append(wt.path)

        runner.run(*args)
        logger.info(f"Removed worktree at {wt.path}")

    def lock_worktree(self, worktree_path: Union[str, Path], reason: Optional[str] = None) -> None:
        """Lock a linked worktree so it is not pruned, moved or removed.

        Raises:
            WorktreeNotFoundError: Unknown worktree
            InvalidPathError: The path is the main worktree
            WorktreeLockedError: The worktree is already locked
        """
        runner = self._runner()
        wt = self.find_worktree(worktree_path)
        if wt.is_main:
            raise InvalidPathError(f"The main worktree cannot be locked: {wt.path}")
        if wt.is_locked:
            raise WorktreeLockedError(wt.lock_reason or wt.path)

        args = ["worktree", "lock"]
        if reason:
            args.extend(["--reason", reason])
        args.append(wt.path)

        runner.run(*args)
        logger.info(f"Locked worktree at {wt.path}" + (f" ({reason})" if reason else ""))

    def unlock_worktree(self, worktree_path: Union[str, Path]) -> None:
        """Unlock a linked worktree.

        Raises:
            WorktreeNotFoundError: Unknown worktree
            InvalidPathError: The path is the main worktree
            CommandFailedError: The worktree is not locked
        """
        runner = self._runner()
        wt = self.find_worktree(worktree_path)
        if wt.is_main:
            raise InvalidPathError(f"The main worktree cannot be unlocked: {wt.path}")

        runner.run("worktree", "unlock", wt.path)
        logger.info(f"Unlocked worktree at {wt.path}")

    def prune_worktrees(self) -> None:
        """Prune administrative data of worktrees whose directory is gone."""
        self._runner().run("worktree", "prune")
        logger.info("Pruned orphaned worktree metadata")
