"""Core functionality for git-worktree-manager"""

from pathlib import Path
from typing import List, Optional, Union

from git_worktree_manager.config import Config
from git_worktree_manager.models import BranchInfo, GitStatusResult, RepositoryInfo, WorktreeInfo
from git_worktree_manager.services.git import BranchQueries, GitOperations, WorktreeService
from git_worktree_manager.services.repository_service import RepositoryService
from git_worktree_manager.utils.logging import get_logger

logger = get_logger(__name__)


class WorktreeManager:
    """Entry point used by the CLI and the TUI, bound to one repository."""

    def __init__(self, repo_path: Union[str, Path], config: Optional[Union[Config, dict]] = None):
        """Initialize WorktreeManager.

        Args:
            repo_path: Path to the git repository
            config: Configuration dict or Config object

        Raises:
            InvalidPathError: repo_path does not exist
            NotARepositoryError: repo_path is not a git repository
        """
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config

        self.repository: RepositoryInfo = RepositoryService.open_repository(repo_path)
        self.repo_path = self.repository.path

        self.worktree_service = WorktreeService(self.repo_path, self.config)
        self.branch_queries = BranchQueries(self.repo_path, self.config)

        logger.info(f"Worktree manager initialized for {self.repo_path}")

    def operations(self, worktree_path: Optional[Union[str, Path]] = None) -> GitOperations:
        """Porcelain operations for a worktree, the repository itself by default."""
        return GitOperations(worktree_path or self.repo_path, self.config)

    # Worktrees

    def list_worktrees(self) -> List[WorktreeInfo]:
        return self.worktree_service.list_worktrees()

    def add_worktree(self, worktree_path: str, branch: str, create_branch: bool = False) -> None:
        self.worktree_service.add_worktree(worktree_path, branch, create_branch)

    def remove_worktree(self, worktree_path: str, force: bool = False) -> None:
        self.worktree_service.remove_worktree(worktree_path, force)

    def lock_worktree(self, worktree_path: str, reason: Optional[str] = None) -> None:
        self.worktree_service.lock_worktree(worktree_path, reason)

    def unlock_worktree(self, worktree_path: str) -> None:
        self.worktree_service.unlock_worktree(worktree_path)

    def prune_worktrees(self) -> None:
        self.worktree_service.prune_worktrees()

    # Branches

    def list_branches(self) -> List[BranchInfo]:
        return self.branch_queries.list_branches()

    def checkout(self, branch: str, worktree_path: Optional[str] = None) -> None:
        self.branch_queries.checkout(worktree_path or self.repo_path, branch)

    # Porcelain

    def status(self, worktree_path: Optional[str] = None) -> GitStatusResult:
        return self.operations(worktree_path).status()

    def stage(self, file_path: str, worktree_path: Optional[str] = None) -> None:
        self.operations(worktree_path).stage(file_path)

    def unstage(self, file_path: str, worktree_path: Optional[str] = None) -> None:
        self.operations(worktree_path).unstage(file_path)

    def commit(self, message: str, worktree_path: Optional[str] = None) -> str:
        return self.operations(worktree_path).commit(message)

    def fetch(self, worktree_path: Optional[str] = None) -> str:
        return self.operations(worktree_path).fetch()

    def pull(self, worktree_path: Optional[str] = None) -> str:
        return self.operations(worktree_path).pull()

    def push(self, worktree_path: Optional[str] = None) -> str:
        return self.operations(worktree_path).push()
