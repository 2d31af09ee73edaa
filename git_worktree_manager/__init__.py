"""
git-worktree-manager - Manage git worktrees, branches and everyday porcelain
"""

from .__version__ import __version__
from .core import WorktreeManager
from .cli.main import main

__all__ = ["WorktreeManager", "main", "__version__"]
