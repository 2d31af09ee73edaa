"""Synchronous git command runner for git-worktree-manager."""

import git
from pathlib import Path
from typing import Union

from git_worktree_manager.exceptions import CommandFailedError, GitIOError
from git_worktree_manager.utils.logging import get_logger

logger = get_logger(__name__)

# Network commands must fail instead of waiting on a credential prompt
# nobody can answer.
GIT_ENV = {"GIT_TERMINAL_PROMPT": "0"}


class GitCommandRunner:
    """Run ``git`` subcommands in a working directory and check the result."""

    def __init__(self, cwd: Union[str, Path]):
        """Initialize the runner.

        Args:
            cwd: Directory every command runs in
        """
        self.cwd = str(cwd)

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return its stdout.

        Args:
            *args: Subcommand and arguments, e.g. ``("worktree", "list")``

        Returns:
            Standard output of the command, trailing newline removed

        Raises:
            CommandFailedError: git exited with a non-zero status
            GitIOError: git could not be started
        """
        command = ["git", *args]
        logger.debug(f"Running {' '.join(command)} in {self.cwd}")

        try:
            status, stdout, stderr = git.Git(self.cwd).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                env=GIT_ENV,
            )
        except git.exc.GitCommandNotFound as e:
            logger.error(f"Could not run git in {self.cwd}: {e}")
            raise GitIOError(str(e)) from e
        except OSError as e:
            logger.error(f"Could not run git in {self.cwd}: {e}")
            raise GitIOError(str(e)) from e

        if status != 0:
            # Some commands (commit with nothing to commit) only report on stdout
            error_output = (stderr or stdout or "").strip()
            if not error_output:
                error_output = f"git {args[0] if args else ''} exited with code {status}".strip()
            logger.error(f"'{' '.join(command)}' failed (exit {status}): {error_output}")
            raise CommandFailedError(error_output, command=command, status=status)

        return stdout
