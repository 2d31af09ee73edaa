"""Repository service for git-worktree-manager."""

from pathlib import Path
from typing import Union

from git_worktree_manager.models.repository import RepositoryInfo
from git_worktree_manager.services.git.validation import ValidationService
from git_worktree_manager.utils.logging import get_logger

logger = get_logger(__name__)


class RepositoryService:
    """Service for opening repositories chosen by the user."""

    @staticmethod
    def repository_name(path: Union[str, Path]) -> str:
        """Final path component, or "Unknown" for paths like "/"."""
        return Path(path).name or "Unknown"

    @staticmethod
    def open_repository(path: Union[str, Path]) -> RepositoryInfo:
        """
        Validate a repository and describe it.

        Args:
            path: Path to the repository, returned unchanged in the result

        Returns:
            RepositoryInfo for the repository

        Raises:
            InvalidPathError: Path does not exist
            NotARepositoryError: Path is not a repository
        """
        repo = ValidationService.validate_repository(path)
        try:
            is_bare = repo.bare
        finally:
            repo.close()

        info = RepositoryInfo(
            path=str(path),
            name=RepositoryService.repository_name(path),
            is_bare=is_bare,
        )
        logger.info(f"Opened repository {info.name} at {info.path}")
        return info

    @staticmethod
    def validate_repo(path: Union[str, Path]) -> bool:
        """
        Check whether a path is a repository.

        Returns:
            False when the path is not a repository

        Raises:
            InvalidPathError: Path does not exist
        """
        return ValidationService.is_repository(path)
