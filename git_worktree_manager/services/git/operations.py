"""Git operations service"""

import git
from pathlib import Path
from typing import Optional, Tuple, TYPE_CHECKING, Union

from git_worktree_manager.exceptions import GitLibraryError
from git_worktree_manager.models.status import GitStatusResult
from git_worktree_manager.services.git.runner import GitCommandRunner
from git_worktree_manager.services.git.status_codes import STATUS_ARGS, parse_porcelain_status
from git_worktree_manager.services.git.validation import ValidationService
from git_worktree_manager.utils.logging import get_logger

if TYPE_CHECKING:
    from git_worktree_manager.config import Config

logger = get_logger(__name__)


def head_branch_name(repo: git.Repo) -> Optional[str]:
    """Short name of the branch HEAD points to.

    Returns None for a detached HEAD and for a branch with no commits yet.
    """
    if repo.head.is_detached or not repo.head.is_valid():
        return None
    return repo.head.reference.name


class GitOperations:
    """Porcelain operations on a single worktree."""

    def __init__(self, worktree_path: Union[str, Path], config: Optional["Config"] = None):
        """Initialize the service.

        Args:
            worktree_path: Path to the worktree (main or linked)
            config: Optional configuration object
        """
        self.worktree_path = str(worktree_path)
        self.config = config
        self.remote_name = config.get("remote_name", "origin") if config else "origin"

    def _runner(self) -> GitCommandRunner:
        """Validate the worktree path and return a runner rooted at it."""
        ValidationService.validate_worktree_path(self.worktree_path)
        return GitCommandRunner(self.worktree_path)

    def fetch(self) -> str:
        """Fetch all remotes. Returns git's stdout."""
        output = self._runner().run("fetch", "--all")
        logger.info(f"Fetched all remotes in {self.worktree_path}")
        return output

    def pull(self) -> str:
        """Pull the current branch. Returns git's stdout."""
        output = self._runner().run("pull")
        logger.info(f"Pulled in {self.worktree_path}")
        return output

    def push(self) -> str:
        """Push the current branch. Returns git's stdout."""
        output = self._runner().run("push")
        logger.info(f"Pushed from {self.worktree_path}")
        return output

    def commit(self, message: str) -> str:
        """Commit the staged changes with the given message. Returns git's stdout."""
        output = self._runner().run("commit", "-m", message)
        logger.info(f"Committed in {self.worktree_path}")
        return output

    def stage(self, file_path: str) -> None:
        """Add a file's current content to the index."""
        self._runner().run("add", "--", file_path)
        logger.debug(f"Staged {file_path} in {self.worktree_path}")

    def unstage(self, file_path: str) -> None:
        """Restore a file's index entry from HEAD, keeping the working copy."""
        self._runner().run("restore", "--staged", "--", file_path)
        logger.debug(f"Unstaged {file_path} in {self.worktree_path}")

    def checkout(self, branch: str) -> None:
        """Switch the worktree to another branch."""
        self._runner().run("checkout", branch)
        logger.info(f"Checked out {branch} in {self.worktree_path}")

    def status(self) -> GitStatusResult:
        """Get branch, changed files and ahead/behind counts of the worktree.

        Raises:
            InvalidPathError: Path does not exist
            NotARepositoryError: Path is not a worktree
        """
        repo = ValidationService.validate_repository(self.worktree_path)
        try:
            branch = head_branch_name(repo)
            output = GitCommandRunner(self.worktree_path).run(*STATUS_ARGS)
            files = parse_porcelain_status(output)
            ahead, behind = self.get_ahead_behind(repo)
        finally:
            repo.close()

        return GitStatusResult(branch=branch, files=files, ahead=ahead, behind=behind)

    def get_upstream(self, repo: git.Repo) -> Optional[git.Reference]:
        """Find the ref the current branch is compared with.

        The configured upstream wins, including a local branch tracked with
        ``branch.<name>.remote = .``; otherwise ``<remote>/<branch>`` is used
        when that ref exists.
        """
        if repo.head.is_detached or not repo.head.is_valid():
            return None

        head = repo.head.reference
        reader = head.config_reader()
        if reader.has_option("remote") and reader.has_option("merge") \
                and str(reader.get_value("remote")) == ".":
            merge = str(reader.get_value("merge"))
            try:
                local_upstream = git.Head(repo, merge)
            except ValueError:
                local_upstream = None
            if local_upstream is not None and local_upstream.is_valid():
                return local_upstream
            logger.debug(f"Local upstream {merge} of {head.name} does not exist")
            return None

        try:
            tracking = head.tracking_branch()
        except ValueError as e:
            logger.debug(f"Could not read upstream of {head.name}: {e}")
            tracking = None
        if tracking is not None and tracking.is_valid():
            return tracking

        fallback = f"refs/remotes/{self.remote_name}/{head.name}"
        try:
            ref = git.Reference(repo, fallback)
            if ref.is_valid():
                return ref
        except ValueError:
            pass
        return None

    def get_ahead_behind(self, repo: git.Repo) -> Tuple[int, int]:
        """Count commits HEAD is ahead of and behind its upstream.

        Returns:
            (ahead, behind), (0, 0) when there is no upstream
        """
        upstream = self.get_upstream(repo)
        if upstream is None:
            return 0, 0

        local = repo.head.reference.name
        try:
            ahead = sum(1 for _ in repo.iter_commits(f"{upstream.path}..{local}"))
            behind = sum(1 for _ in repo.iter_commits(f"{local}..{upstream.path}"))
        except git.exc.GitCommandError as e:
            raise GitLibraryError(f"could not compare {local} with {upstream.name}: {e}") from e

        logger.debug(f"{local} is {ahead} ahead, {behind} behind {upstream.name}")
        return ahead, behind
