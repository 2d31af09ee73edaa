"""Tests for the exception hierarchy"""
import json

import pytest

from git_worktree_manager.exceptions import (
    BranchInUseError,
    CommandFailedError,
    GitIOError,
    GitLibraryError,
    InvalidPathError,
    NotARepositoryError,
    UncommittedChangesError,
    UnknownCommandError,
    WorktreeLockedError,
    WorktreeManagerError,
    WorktreeNotFoundError,
)


class TestErrorMessages:
    """Each error renders the message shown to the user."""

    @pytest.mark.parametrize("error, message", [
        (GitLibraryError("bad object"), "Git error: bad object"),
        (GitIOError("git not found"), "IO error: git not found"),
        (CommandFailedError("fatal: boom"), "Command failed: fatal: boom"),
        (InvalidPathError("Path does not exist: /x"), "Invalid path: Path does not exist: /x"),
        (NotARepositoryError("/tmp/plain"), "Not a git repository: /tmp/plain"),
        (UncommittedChangesError(), "Worktree has uncommitted changes"),
        (WorktreeLockedError("on a USB disk"), "Worktree is locked: on a USB disk"),
        (BranchInUseError("feature"), "Branch already checked out in another worktree: feature"),
        (WorktreeNotFoundError("/tmp/wt"), "Worktree not found: /tmp/wt"),
        (UnknownCommandError("frobnicate"), "Unknown command: frobnicate"),
    ])
    def test_message(self, error, message):
        """Test str() of every error type."""
        assert str(error) == message
        assert isinstance(error, WorktreeManagerError)

    def test_command_failed_keeps_details(self):
        """Test CommandFailedError carries command, status and stderr."""
        error = CommandFailedError("fatal: nope", command=("git", "pull"), status=128)
        assert error.stderr == "fatal: nope"
        assert error.command == ["git", "pull"]
        assert error.status == 128

    def test_command_failed_defaults(self):
        """Test CommandFailedError without optional details."""
        error = CommandFailedError("oops")
        assert error.command == []
        assert error.status is None


class TestErrorSerialization:
    """Errors serialize to a bare JSON string."""

    def test_to_json_is_string(self):
        """Test to_json returns the message as a JSON string."""
        error = WorktreeLockedError("busy")
        assert json.loads(error.to_json()) == "Worktree is locked: busy"

    def test_to_json_escapes_quotes(self):
        """Test messages containing quotes stay valid JSON."""
        error = CommandFailedError('error: pathspec "nope" did not match')
        assert json.loads(error.to_json()) == 'Command failed: error: pathspec "nope" did not match'
