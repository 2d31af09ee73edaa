"""Shared constants for git-worktree-manager."""

from dataclasses import dataclass
from typing import List

from git_worktree_manager.models.status import FileState


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str


# Worktree table columns, shared by CLI and TUI
WORKTREE_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("flags", ""),
    ColumnDefinition("branch", "Branch"),
    ColumnDefinition("path", "Path"),
    ColumnDefinition("head", "HEAD"),
    ColumnDefinition("notes", "Notes"),
]

FILE_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("staged", ""),
    ColumnDefinition("status", "Status"),
    ColumnDefinition("path", "File"),
]

BRANCH_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("current", ""),
    ColumnDefinition("name", "Branch"),
    ColumnDefinition("kind", "Kind"),
]


# Symbol constants
SYMBOL_MAIN_WORKTREE = "@"
SYMBOL_LOCKED = "L"
SYMBOL_PRUNABLE = "P"
SYMBOL_STAGED = "S"
SYMBOL_UNSTAGED = " "
SYMBOL_CURRENT_BRANCH = "*"
SYMBOL_AHEAD = "↑"
SYMBOL_BEHIND = "↓"
DETACHED_LABEL = "(detached)"

SHORT_SHA_LENGTH = 7


# Colors per file state (Rich color names, also valid in Textual markup)
FILE_STATE_COLORS = {
    FileState.ADDED: "green",
    FileState.MODIFIED: "yellow",
    FileState.DELETED: "red",
    FileState.RENAMED: "cyan",
    FileState.TYPECHANGE: "magenta",
    FileState.UNTRACKED: "bright_black",
    FileState.CONFLICTED: "bold red",
}


class WorktreeStyleType:
    """Style types for worktree rows."""

    MAIN = "main"
    LOCKED = "locked"
    PRUNABLE = "prunable"
    NORMAL = "normal"


# CLI colors (Rich color names)
CLI_COLORS = {
    WorktreeStyleType.MAIN: "cyan",
    WorktreeStyleType.LOCKED: "yellow",
    WorktreeStyleType.PRUNABLE: "red",
    WorktreeStyleType.NORMAL: None,
}


# TUI colors (color names for Textual)
TUI_COLORS = {
    WorktreeStyleType.MAIN: "cyan",
    WorktreeStyleType.LOCKED: "yellow",
    WorktreeStyleType.PRUNABLE: "red",
    WorktreeStyleType.NORMAL: "green",
}


LEGEND_TEXT = """
Legend:
@ = Main worktree         L = Locked
P = Prunable (directory missing)
S = Staged change         * = Current branch
↑n = Commits ahead        ↓n = Commits behind upstream

Colors:
Cyan = Main worktree
Yellow = Locked worktree
Red = Directory missing
"""
