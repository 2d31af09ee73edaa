"""Pytest fixtures for git-worktree-manager tests"""
import os
import tempfile
from pathlib import Path

import pytest
import git

from git_worktree_manager.config import Config


def _configure_user(repo):
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()


def _commit_file(repo, name, content, message):
    path = Path(repo.working_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolve symlinked temp dirs so paths match what git reports
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'remote_name': 'origin',
        'verbose': False,
        'debug': False,
        'refresh_interval': 5.0,
    }


@pytest.fixture
def config():
    """Create a default Config object."""
    return Config()


@pytest.fixture
def commit_file():
    """Write, stage and commit a file in a repository."""
    return _commit_file


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)
    _configure_user(repo)

    # Create initial commit on main branch
    _commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def repo_path(git_repo):
    """Path of the test repository as a string."""
    return git_repo.working_dir


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Create a Git repository with extra local branches."""
    repo = git_repo

    repo.git.checkout('-b', 'feature/one')
    _commit_file(repo, "one.txt", "one\n", "Add one")

    repo.git.checkout('main')
    repo.git.checkout('-b', 'feature/two')
    _commit_file(repo, "two.txt", "two\n", "Add two")

    # Go back to main
    repo.git.checkout('main')

    yield repo


@pytest.fixture
def linked_worktree(git_repo, temp_dir):
    """Add a linked worktree on a new branch 'feature/wt' and return its path."""
    worktree_path = temp_dir / "wt-feature"
    git_repo.git.worktree('add', '-b', 'feature/wt', str(worktree_path))
    return str(worktree_path)


@pytest.fixture
def remote_repo(git_repo, temp_dir):
    """Attach a bare 'origin' remote that main tracks and return the bare repo."""
    bare_path = temp_dir / "remote.git"
    bare = git.Repo.init(bare_path, bare=True)
    bare.git.symbolic_ref('HEAD', 'refs/heads/main')

    git_repo.create_remote('origin', str(bare_path))
    git_repo.git.push('-u', 'origin', 'main')
    # Gives the remote a symbolic origin/HEAD, like a fresh clone has
    git_repo.git.remote('set-head', 'origin', 'main')

    yield bare

    bare.close()


@pytest.fixture
def other_clone(remote_repo, temp_dir):
    """A second clone of the remote, used to push commits the test repo doesn't have."""
    clone = git.Repo.clone_from(remote_repo.git_dir, temp_dir / "other_clone")
    _configure_user(clone)

    yield clone

    clone.close()
