"""Worktree formatting utilities."""

from git_worktree_manager.constants import (
    DETACHED_LABEL,
    SHORT_SHA_LENGTH,
    SYMBOL_LOCKED,
    SYMBOL_MAIN_WORKTREE,
    SYMBOL_PRUNABLE,
    WorktreeStyleType,
)
from git_worktree_manager.models.worktree import WorktreeInfo


def format_worktree_flags(worktree: WorktreeInfo) -> str:
    """
    Format the main/locked/prunable markers of a worktree.

    Args:
        worktree: Worktree to describe

    Returns:
        Marker string such as "@" or "L", empty for a plain linked worktree
    """
    flags = ""
    if worktree.is_main:
        flags += SYMBOL_MAIN_WORKTREE
    if worktree.is_locked:
        flags += SYMBOL_LOCKED
    if worktree.is_prunable:
        flags += SYMBOL_PRUNABLE
    return flags


def format_worktree_branch(worktree: WorktreeInfo) -> str:
    return worktree.branch or DETACHED_LABEL


def format_short_sha(sha) -> str:
    return sha[:SHORT_SHA_LENGTH] if sha else ""


def format_worktree_notes(worktree: WorktreeInfo) -> str:
    """
    Format the notes column: lock reason and missing-directory hint.

    Returns:
        Human readable notes, empty when there is nothing to say
    """
    notes = []
    if worktree.is_locked:
        notes.append(f"locked: {worktree.lock_reason}" if worktree.lock_reason else "locked")
    if worktree.is_prunable:
        notes.append("directory missing")
    return ", ".join(notes)


def get_worktree_style_type(worktree: WorktreeInfo) -> str:
    """
    Determine the style type for a worktree row.

    Args:
        worktree: Worktree details

    Returns:
        WorktreeStyleType constant
    """
    if worktree.is_prunable:
        return WorktreeStyleType.PRUNABLE
    if worktree.is_main:
        return WorktreeStyleType.MAIN
    if worktree.is_locked:
        return WorktreeStyleType.LOCKED
    return WorktreeStyleType.NORMAL
