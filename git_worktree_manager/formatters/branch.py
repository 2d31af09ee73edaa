"""Branch name formatting utilities."""

from git_worktree_manager.constants import SYMBOL_CURRENT_BRANCH
from git_worktree_manager.models.branch import BranchInfo


def format_current_marker(branch: BranchInfo) -> str:
    return SYMBOL_CURRENT_BRANCH if branch.is_current else ""


def format_branch_kind(branch: BranchInfo) -> str:
    return "remote" if branch.is_remote else "local"


def format_branch_name(branch: BranchInfo) -> str:
    """
    Format branch name with current branch indicator.

    Args:
        branch: Branch to format

    Returns:
        Formatted branch name, e.g. "main *"
    """
    marker = format_current_marker(branch)
    return f"{branch.name} {marker}" if marker else branch.name
