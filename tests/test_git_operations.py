"""Tests for GitOperations"""
from pathlib import Path

import pytest
import git

from git_worktree_manager.exceptions import (
    CommandFailedError,
    InvalidPathError,
    NotARepositoryError,
)
from git_worktree_manager.models.status import FileState, FileStatus
from git_worktree_manager.services.git.operations import GitOperations, head_branch_name


class TestHeadBranchName:
    """Test reading the current branch."""

    def test_branch(self, git_repo):
        """Test the short branch name is returned."""
        assert head_branch_name(git_repo) == "main"

    def test_detached(self, git_repo):
        """Test a detached HEAD has no branch."""
        git_repo.git.checkout("--detach")
        assert head_branch_name(git_repo) is None

    def test_unborn(self, temp_dir):
        """Test a repository without commits has no branch."""
        repo = git.Repo.init(temp_dir / "empty")
        try:
            assert head_branch_name(repo) is None
        finally:
            repo.close()


class TestStatus:
    """Test worktree status."""

    def test_clean(self, repo_path, mock_config):
        """Test a clean repository without upstream."""
        status = GitOperations(repo_path, mock_config).status()
        assert status.branch == "main"
        assert status.files == []
        assert (status.ahead, status.behind) == (0, 0)

    def test_changes(self, git_repo, repo_path):
        """Test staged, unstaged and untracked files are reported."""
        root = Path(repo_path)
        (root / "README.md").write_text("changed\n")
        (root / "staged.txt").write_text("staged\n")
        git_repo.index.add(["staged.txt"])
        (root / "notes").mkdir()
        (root / "notes" / "todo.txt").write_text("untracked\n")

        files = GitOperations(repo_path).status().files
        assert set(files) == {
            FileStatus("README.md", FileState.MODIFIED, False),
            FileStatus("staged.txt", FileState.ADDED, True),
            FileStatus("notes/todo.txt", FileState.UNTRACKED, False),
        }

    def test_staged_and_unstaged_same_file(self, git_repo, repo_path):
        """Test a file with both kinds of change appears twice."""
        readme = Path(repo_path) / "README.md"
        readme.write_text("first\n")
        git_repo.index.add(["README.md"])
        readme.write_text("second\n")

        files = GitOperations(repo_path).status().files
        assert files == [
            FileStatus("README.md", FileState.MODIFIED, True),
            FileStatus("README.md", FileState.MODIFIED, False),
        ]

    def test_deleted(self, repo_path):
        """Test a deleted file is reported as deleted."""
        (Path(repo_path) / "README.md").unlink()
        assert GitOperations(repo_path).status().files == [
            FileStatus("README.md", FileState.DELETED, False)
        ]

    def test_detached(self, git_repo, repo_path):
        """Test status of a detached HEAD."""
        git_repo.git.checkout("--detach")
        status = GitOperations(repo_path).status()
        assert status.branch is None
        assert (status.ahead, status.behind) == (0, 0)

    def test_unborn_branch(self, temp_dir):
        """Test status of a repository without commits."""
        repo = git.Repo.init(temp_dir / "empty")
        repo.close()
        (temp_dir / "empty" / "first.txt").write_text("hi\n")

        status = GitOperations(temp_dir / "empty").status()
        assert status.branch is None
        assert status.files == [FileStatus("first.txt", FileState.UNTRACKED, False)]

    def test_linked_worktree(self, linked_worktree):
        """Test status of a linked worktree reports its own branch."""
        assert GitOperations(linked_worktree).status().branch == "feature/wt"

    def test_missing_path(self, temp_dir):
        """Test status of a missing path."""
        with pytest.raises(InvalidPathError):
            GitOperations(temp_dir / "missing").status()

    def test_not_a_repository(self, temp_dir):
        """Test status of a plain directory."""
        with pytest.raises(NotARepositoryError):
            GitOperations(temp_dir).status()


class TestAheadBehind:
    """Test ahead/behind counting against the upstream."""

    def test_in_sync(self, repo_path, remote_repo):
        """Test a freshly pushed branch."""
        status = GitOperations(repo_path).status()
        assert (status.ahead, status.behind) == (0, 0)

    def test_ahead(self, git_repo, repo_path, remote_repo, commit_file):
        """Test local commits count as ahead."""
        commit_file(git_repo, "a.txt", "a\n", "Local one")
        commit_file(git_repo, "b.txt", "b\n", "Local two")
        status = GitOperations(repo_path).status()
        assert (status.ahead, status.behind) == (2, 0)

    def test_behind_after_fetch(self, repo_path, other_clone, commit_file):
        """Test commits pushed elsewhere count as behind once fetched."""
        commit_file(other_clone, "remote.txt", "r\n", "Remote change")
        other_clone.git.push("origin", "main")

        ops = GitOperations(repo_path)
        assert ops.status().behind == 0
        ops.fetch()
        status = ops.status()
        assert (status.ahead, status.behind) == (0, 1)

    def test_fallback_to_remote_branch(self, git_repo, repo_path, remote_repo, commit_file):
        """Test a branch without upstream config compares with origin/<branch>."""
        git_repo.git.checkout("-b", "topic")
        git_repo.git.push("origin", "topic")
        commit_file(git_repo, "topic.txt", "t\n", "Topic work")

        assert git_repo.head.reference.tracking_branch() is None
        assert GitOperations(repo_path).status().ahead == 1

    def test_local_branch_upstream(self, git_repo, repo_path, commit_file):
        """Test a branch tracking another local branch compares with it."""
        git_repo.git.checkout("--track", "-b", "feat", "main")
        commit_file(git_repo, "feat.txt", "f\n", "Feature work")

        assert git_repo.git.config("branch.feat.remote") == "."
        status = GitOperations(repo_path).status()
        assert status.branch == "feat"
        assert (status.ahead, status.behind) == (1, 0)

    def test_local_branch_upstream_behind(self, git_repo, repo_path, commit_file):
        """Test commits on the tracked local branch count as behind."""
        git_repo.git.branch("--track", "feat", "main")
        commit_file(git_repo, "main.txt", "m\n", "Main work")
        git_repo.git.checkout("feat")

        status = GitOperations(repo_path).status()
        assert (status.ahead, status.behind) == (0, 1)

    def test_fallback_uses_configured_remote(
        self, git_repo, repo_path, remote_repo, commit_file, mock_config
    ):
        """Test the fallback remote comes from configuration."""
        git_repo.create_remote("fork", remote_repo.git_dir)
        git_repo.git.checkout("-b", "forked")
        git_repo.git.push("fork", "forked")
        commit_file(git_repo, "fork.txt", "f\n", "Fork work")

        assert GitOperations(repo_path, mock_config).status().ahead == 0
        mock_config["remote_name"] = "fork"
        assert GitOperations(repo_path, mock_config).status().ahead == 1


class TestStaging:
    """Test stage and unstage."""

    def test_stage(self, repo_path):
        """Test staging an untracked file."""
        (Path(repo_path) / "new.txt").write_text("new\n")
        ops = GitOperations(repo_path)
        ops.stage("new.txt")
        assert ops.status().files == [FileStatus("new.txt", FileState.ADDED, True)]

    def test_unstage(self, repo_path):
        """Test unstaging keeps the working copy change."""
        (Path(repo_path) / "README.md").write_text("edited\n")
        ops = GitOperations(repo_path)
        ops.stage("README.md")
        assert ops.status().files == [FileStatus("README.md", FileState.MODIFIED, True)]

        ops.unstage("README.md")
        assert ops.status().files == [FileStatus("README.md", FileState.MODIFIED, False)]

    def test_stage_unknown_file(self, repo_path):
        """Test staging a path that doesn't exist fails."""
        with pytest.raises(CommandFailedError, match="did not match"):
            GitOperations(repo_path).stage("ghost.txt")

    def test_stage_missing_worktree(self, temp_dir):
        """Test the worktree path is validated first."""
        with pytest.raises(InvalidPathError, match="Worktree path does not exist"):
            GitOperations(temp_dir / "gone").stage("a.txt")


class TestCommit:
    """Test committing."""

    def test_commit(self, git_repo, repo_path):
        """Test committing staged changes."""
        (Path(repo_path) / "README.md").write_text("v2\n")
        ops = GitOperations(repo_path)
        ops.stage("README.md")
        output = ops.commit("Update readme")

        assert "Update readme" in output
        assert git_repo.head.commit.message.strip() == "Update readme"
        assert ops.status().is_clean

    def test_nothing_to_commit(self, repo_path):
        """Test committing with nothing staged fails."""
        with pytest.raises(CommandFailedError, match="nothing to commit"):
            GitOperations(repo_path).commit("Nothing")

    def test_empty_message(self, repo_path):
        """Test an empty commit message is refused by git."""
        (Path(repo_path) / "README.md").write_text("v3\n")
        ops = GitOperations(repo_path)
        ops.stage("README.md")
        with pytest.raises(CommandFailedError):
            ops.commit("")


class TestRemoteOperations:
    """Test fetch, pull and push against a local bare remote."""

    def test_fetch(self, git_repo, repo_path, other_clone, commit_file):
        """Test fetch updates remote-tracking refs."""
        new_commit = commit_file(other_clone, "f.txt", "f\n", "Fetched")
        other_clone.git.push("origin", "main")

        GitOperations(repo_path).fetch()
        assert git_repo.commit("origin/main").hexsha == new_commit.hexsha

    def test_pull(self, git_repo, repo_path, other_clone, commit_file):
        """Test pull brings in remote commits."""
        new_commit = commit_file(other_clone, "p.txt", "p\n", "Pulled")
        other_clone.git.push("origin", "main")

        GitOperations(repo_path).pull()
        assert git_repo.head.commit.hexsha == new_commit.hexsha
        assert (Path(repo_path) / "p.txt").exists()

    def test_push(self, git_repo, repo_path, remote_repo, commit_file):
        """Test push publishes local commits."""
        local_commit = commit_file(git_repo, "push.txt", "x\n", "Pushed")
        ops = GitOperations(repo_path)
        ops.push()

        assert remote_repo.heads.main.commit.hexsha == local_commit.hexsha
        assert ops.status().ahead == 0

    def test_push_without_remote(self, repo_path):
        """Test push fails cleanly when there is nowhere to push."""
        with pytest.raises(CommandFailedError):
            GitOperations(repo_path).push()


class TestCheckout:
    """Test switching branches."""

    def test_checkout(self, git_repo_with_branches):
        """Test checking out an existing branch."""
        GitOperations(git_repo_with_branches.working_dir).checkout("feature/one")
        assert git_repo_with_branches.active_branch.name == "feature/one"

    def test_checkout_unknown(self, repo_path):
        """Test checking out an unknown branch fails."""
        with pytest.raises(CommandFailedError):
            GitOperations(repo_path).checkout("nope")
