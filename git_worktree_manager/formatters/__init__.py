"""Formatting utilities for git-worktree-manager.

This package provides formatting functions shared by the CLI and the TUI,
organized into logical modules:
- worktree: Worktree markers, notes and row styles
- status: File state labels and ahead/behind text
- branch: Branch name and kind formatting
"""

# Worktree formatters
from .worktree import (
    format_worktree_flags,
    format_worktree_branch,
    format_short_sha,
    format_worktree_notes,
    get_worktree_style_type,
)

# Status formatters
from .status import (
    format_file_state,
    format_staged_marker,
    format_ahead_behind,
    format_status_summary,
)

# Branch formatters
from .branch import (
    format_current_marker,
    format_branch_kind,
    format_branch_name,
)

__all__ = [
    # Worktree
    "format_worktree_flags",
    "format_worktree_branch",
    "format_short_sha",
    "format_worktree_notes",
    "get_worktree_style_type",
    # Status
    "format_file_state",
    "format_staged_marker",
    "format_ahead_behind",
    "format_status_summary",
    # Branch
    "format_current_marker",
    "format_branch_kind",
    "format_branch_name",
]
