"""Custom widgets for git-worktree-manager TUI."""

from typing import Optional

from textual.app import ComposeResult, RenderResult
from textual.events import Click
from textual.widgets import Header, Static
from textual.widgets._header import HeaderIcon, HeaderTitle, HeaderClockSpace
from rich.text import Text

from git_worktree_manager.__version__ import __version__
from git_worktree_manager.constants import DETACHED_LABEL
from git_worktree_manager.formatters import format_ahead_behind
from git_worktree_manager.models import GitStatusResult


class VersionDisplay(HeaderClockSpace):
    """Custom widget to display version in place of clock."""

    DEFAULT_CSS = """
    VersionDisplay {
        width: auto;
        dock: right;
        padding: 0 1;
        background: $foreground 5%;
        color: $text;
        text-align: center;
        text-opacity: 85%;
    }
    """

    def render(self) -> RenderResult:
        return Text(f"v{__version__}")


class NonExpandingHeader(Header):
    """Header widget that doesn't expand/contract on click and shows version instead of clock."""

    def compose(self) -> ComposeResult:
        yield HeaderIcon().data_bind(Header.icon)
        yield HeaderTitle()
        yield VersionDisplay() if self._show_clock else HeaderClockSpace()

    def on_click(self, event: Click) -> None:
        """Override to disable click-to-expand behavior."""
        event.stop()


class StatusSummary(Static):
    """Branch, upstream and change counts of the selected worktree."""

    DEFAULT_CSS = """
    StatusSummary {
        height: auto;
        padding: 0 1 1 1;
    }
    """

    def show_status(self, status: GitStatusResult, worktree_path: Optional[str] = None) -> None:
        # Built as Text so paths and branch names are never parsed as markup
        text = Text()
        if worktree_path:
            text.append(worktree_path, style="dim")
            text.append("\n")
        text.append("Branch: ", style="bold")
        text.append(status.branch or DETACHED_LABEL)
        text.append("\nUpstream: ", style="bold")
        text.append(format_ahead_behind(status.ahead, status.behind))
        text.append("\nChanges: ", style="bold")
        if status.is_clean:
            text.append("clean", style="green")
        else:
            text.append(
                f"{len(status.staged_files)} staged, {len(status.unstaged_files)} unstaged",
                style="yellow",
            )
        self.update(text)

    def show_message(self, message: str, style: str = "") -> None:
        self.update(Text(message, style=style))
