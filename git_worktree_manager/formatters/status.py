"""Status formatting utilities."""

from git_worktree_manager.constants import (
    FILE_STATE_COLORS,
    SYMBOL_AHEAD,
    SYMBOL_BEHIND,
    SYMBOL_STAGED,
    SYMBOL_UNSTAGED,
)
from git_worktree_manager.models.status import FileState, FileStatus, GitStatusResult


def format_file_state(state: FileState, markup: bool = False) -> str:
    """
    Format a file state label, optionally wrapped in Rich color markup.

    Args:
        state: File state enum value
        markup: Wrap the label in [color]...[/color]

    Returns:
        Display text for the state
    """
    if not markup:
        return state.value
    color = FILE_STATE_COLORS.get(state)
    return f"[{color}]{state.value}[/{color}]" if color else state.value


def format_staged_marker(file_status: FileStatus) -> str:
    return SYMBOL_STAGED if file_status.staged else SYMBOL_UNSTAGED


def format_ahead_behind(ahead: int, behind: int) -> str:
    """
    Format ahead/behind counts.

    Returns:
        "↑2 ↓1", "↑3", "↓4", or "up to date" when both are zero

    Example:
        format_ahead_behind(2, 0) == "↑2"
    """
    parts = []
    if ahead:
        parts.append(f"{SYMBOL_AHEAD}{ahead}")
    if behind:
        parts.append(f"{SYMBOL_BEHIND}{behind}")
    return " ".join(parts) if parts else "up to date"


def format_status_summary(status: GitStatusResult) -> str:
    """
    One-line summary of a worktree status.

    Example:
        "main ↑1 - 2 staged, 3 unstaged"
    """
    branch = status.branch or "(detached)"
    sync = format_ahead_behind(status.ahead, status.behind)
    if status.is_clean:
        changes = "clean"
    else:
        changes = f"{len(status.staged_files)} staged, {len(status.unstaged_files)} unstaged"
    return f"{branch} {sync} - {changes}"
