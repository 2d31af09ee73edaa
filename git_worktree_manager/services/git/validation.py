"""Path and repository validation for git-worktree-manager."""

import git
from pathlib import Path
from typing import Union

from git_worktree_manager.exceptions import InvalidPathError, NotARepositoryError
from git_worktree_manager.utils.logging import get_logger

logger = get_logger(__name__)


class ValidationService:
    """Checks run before any git work touches a path."""

    @staticmethod
    def validate_worktree_path(worktree_path: Union[str, Path]) -> Path:
        """
        Check that a worktree path exists and is a directory.

        Args:
            worktree_path: Path to the worktree

        Returns:
            The path as a Path object

        Raises:
            InvalidPathError: Path is missing or not a directory
        """
        path = Path(worktree_path)
        if not path.exists():
            raise InvalidPathError(f"Worktree path does not exist: {worktree_path}")
        if not path.is_dir():
            raise InvalidPathError(f"Worktree path is not a directory: {worktree_path}")
        return path

    @staticmethod
    def validate_repository(repo_path: Union[str, Path]) -> git.Repo:
        """
        Open a path as a git repository.

        Parent directories are not searched; the path itself must be the
        repository (a working tree root, a linked worktree or a bare repo).

        Args:
            repo_path: Path to the repository

        Returns:
            git.Repo: The opened repository

        Raises:
            InvalidPathError: Path does not exist
            NotARepositoryError: Path exists but is not a repository
        """
        path = Path(repo_path)
        if not path.exists():
            raise InvalidPathError(f"Path does not exist: {repo_path}")

        try:
            return git.Repo(path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            logger.debug(f"{repo_path} is not a git repository: {e!r}")
            raise NotARepositoryError(str(repo_path)) from e

    @staticmethod
    def is_repository(repo_path: Union[str, Path]) -> bool:
        """
        Check whether a path is a git repository.

        Args:
            repo_path: Path to check

        Returns:
            True if the path opens as a repository

        Raises:
            InvalidPathError: Path does not exist
        """
        try:
            repo = ValidationService.validate_repository(repo_path)
        except NotARepositoryError:
            return False
        repo.close()
        return True
