"""Display and formatting service for worktree, branch and status information"""
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_worktree_manager.constants import (
    BRANCH_COLUMNS,
    CLI_COLORS,
    FILE_COLUMNS,
    LEGEND_TEXT,
    WORKTREE_COLUMNS,
)
from git_worktree_manager.formatters import (
    format_ahead_behind,
    format_branch_kind,
    format_current_marker,
    format_file_state,
    format_short_sha,
    format_staged_marker,
    format_status_summary,
    format_worktree_branch,
    format_worktree_flags,
    format_worktree_notes,
    get_worktree_style_type,
)
from git_worktree_manager.models import BranchInfo, GitStatusResult, RepositoryInfo, WorktreeInfo
from git_worktree_manager.utils.logging import get_logger

logger = get_logger(__name__)


class DisplayService:
    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def display_worktree_table(self, worktrees: List[WorktreeInfo], show_legend: bool = False) -> None:
        """Display a table of worktrees, main worktree first."""
        table = Table()
        for col in WORKTREE_COLUMNS:
            table.add_column(col.label)

        for worktree in worktrees:
            row_style = CLI_COLORS.get(get_worktree_style_type(worktree))
            # Match WORKTREE_COLUMNS order: flags, Branch, Path, HEAD, Notes
            table.add_row(
                format_worktree_flags(worktree),
                escape(format_worktree_branch(worktree)),
                escape(worktree.path),
                format_short_sha(worktree.head),
                escape(format_worktree_notes(worktree)),
                style=row_style,
            )

        self.console.print(table)

        if show_legend:
            self.console.print(LEGEND_TEXT)
            self.console.print(f"Total worktrees: {len(worktrees)}")

    def display_branch_table(self, branches: List[BranchInfo]) -> None:
        table = Table()
        for col in BRANCH_COLUMNS:
            table.add_column(col.label)

        for branch in branches:
            table.add_row(
                format_current_marker(branch),
                escape(branch.name),
                format_branch_kind(branch),
                style="bold" if branch.is_current else None,
            )

        self.console.print(table)

    def display_status(self, status: GitStatusResult, worktree_path: Optional[str] = None) -> None:
        """Display the branch line and the changed files of one worktree."""
        header = f"On branch [bold]{escape(status.branch)}[/bold]" if status.branch else "HEAD detached"
        if worktree_path:
            header += f" ({escape(worktree_path)})"
        self.console.print(header)
        self.console.print(f"Upstream: {format_ahead_behind(status.ahead, status.behind)}")

        if status.is_clean:
            self.console.print("[green]Nothing to commit, working tree clean[/green]")
            return

        table = Table()
        for col in FILE_COLUMNS:
            table.add_column(col.label)
        for file_status in status.files:
            table.add_row(
                format_staged_marker(file_status),
                format_file_state(file_status.status, markup=True),
                escape(file_status.path),
            )
        self.console.print(table)

        if self.verbose:
            self.console.print(format_status_summary(status))

    def display_repository(self, repository: RepositoryInfo) -> None:
        kind = "bare repository" if repository.is_bare else "repository"
        self.console.print(f"[bold]{escape(repository.name)}[/bold] ({kind}) at {escape(repository.path)}")

    def display_output(self, output: str) -> None:
        """Echo git output (fetch, pull, push, commit) when there is any."""
        if output:
            self.console.print(output, markup=False, highlight=False)

    def success(self, message: str) -> None:
        logger.info(message)
        self.console.print(message, style="green", markup=False)
