"""Branch query service for git-worktree-manager."""

import git
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING, Union

from git_worktree_manager.models.branch import BranchInfo
from git_worktree_manager.services.git.operations import GitOperations, head_branch_name
from git_worktree_manager.services.git.validation import ValidationService
from git_worktree_manager.utils.logging import get_logger

if TYPE_CHECKING:
    from git_worktree_manager.config import Config

logger = get_logger(__name__)


class BranchQueries:
    """Service for listing and switching branches."""

    def __init__(self, repo_path: Union[str, Path], config: Optional["Config"] = None):
        """Initialize the branch queries service.

        Args:
            repo_path: Path to the git repository
            config: Optional configuration object
        """
        self.repo_path = str(repo_path)
        self.config = config

    def list_branches(self) -> List[BranchInfo]:
        """List local branches followed by remote-tracking branches.

        Symbolic remote refs such as ``origin/HEAD`` are skipped.
        """
        repo = ValidationService.validate_repository(self.repo_path)
        try:
            current_branch = head_branch_name(repo)

            branches = [
                BranchInfo(name=head.name, is_remote=False, is_current=head.name == current_branch)
                for head in repo.heads
            ]
            for ref in repo.references:
                if not isinstance(ref, git.RemoteReference) or ref.remote_head == "HEAD":
                    continue
                branches.append(BranchInfo(name=ref.name, is_remote=True, is_current=False))
        finally:
            repo.close()

        logger.debug(f"Found {len(branches)} branches in {self.repo_path}")
        return branches

    def checkout(self, worktree_path: Union[str, Path], branch: str) -> None:
        """Check out a branch in the given worktree."""
        GitOperations(worktree_path, self.config).checkout(branch)
