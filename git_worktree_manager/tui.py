"""Interactive TUI for git-worktree-manager using Textual."""

import asyncio
from typing import List, Optional

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.coordinate import Coordinate
from textual.widgets import DataTable, Footer, Static
from rich.text import Text

from .__version__ import __version__
from .constants import (
    FILE_COLUMNS,
    FILE_STATE_COLORS,
    LEGEND_TEXT,
    TUI_COLORS,
    WORKTREE_COLUMNS,
    WorktreeStyleType,
)
from .core import WorktreeManager
from .exceptions import UncommittedChangesError, WorktreeLockedError, WorktreeManagerError
from .formatters import (
    format_file_state,
    format_short_sha,
    format_staged_marker,
    format_worktree_branch,
    format_worktree_flags,
    format_worktree_notes,
    get_worktree_style_type,
)
from .models import FileStatus, GitStatusResult, RepositoryInfo, WorktreeInfo
from .ui.screens import (
    AddWorktreeScreen,
    BranchPickerScreen,
    CommitScreen,
    ConfirmScreen,
    InfoScreen,
    LockScreen,
    RepositoryPickerScreen,
)
from .ui.widgets import NonExpandingHeader, StatusSummary
from .utils.logging import get_logger

logger = get_logger(__name__)


class WorktreeManagerApp(App):
    """Interactive TUI for git-worktree-manager."""

    ENABLE_COMMAND_PALETTE = True
    TITLE = "Git Worktree Manager"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    Screen {
        background: $surface;
    }

    #main {
        height: 1fr;
    }

    #worktree-table {
        width: 3fr;
        height: 1fr;
    }

    #status-panel {
        width: 2fr;
        height: 1fr;
        border-left: solid $panel;
    }

    #file-table {
        height: 1fr;
    }

    #status-bar {
        dock: bottom;
        height: auto;
        background: $panel;
        padding: 0 1;
    }

    ToastRack {
        offset: 0 -3;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "add_worktree", "Add"),
        Binding("d", "remove_worktree", "Remove"),
        Binding("l", "toggle_lock", "Lock/Unlock"),
        Binding("f", "fetch", "Fetch"),
        Binding("p", "pull", "Pull"),
        Binding("u", "push", "Push"),
        Binding("s", "stage", "Stage"),
        Binding("x", "unstage", "Unstage"),
        Binding("c", "commit", "Commit"),
        Binding("b", "checkout", "Checkout"),
        Binding("o", "open_repository", "Open Repo"),
        Binding("r", "refresh", "Refresh"),
        Binding("question_mark", "show_legend", "Legend"),
    ]

    def __init__(self, manager: WorktreeManager):
        super().__init__()
        self.manager = manager
        self.worktrees: List[WorktreeInfo] = []
        self.selected_path: Optional[str] = None
        self.status: Optional[GitStatusResult] = None

    def compose(self) -> ComposeResult:
        yield NonExpandingHeader(show_clock=True, icon="")
        with Horizontal(id="main"):
            yield DataTable(id="worktree-table", cursor_type="row", zebra_stripes=True)
            with Vertical(id="status-panel"):
                yield StatusSummary(id="status-summary")
                yield DataTable(id="file-table", cursor_type="row")
        yield Static(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Set up tables, load worktrees and start polling status."""
        self.sub_title = self.manager.repository.path

        worktree_table = self.query_one("#worktree-table", DataTable)
        for col in WORKTREE_COLUMNS:
            worktree_table.add_column(col.label, key=col.key)

        file_table = self.query_one("#file-table", DataTable)
        for col in FILE_COLUMNS:
            file_table.add_column(col.label, key=col.key)

        worktree_table.loading = True
        self.load_worktrees()
        self.set_interval(self.manager.config.refresh_interval, self._auto_refresh)

    # Selection helpers

    def _selected_worktree(self) -> Optional[WorktreeInfo]:
        for worktree in self.worktrees:
            if worktree.path == self.selected_path:
                return worktree
        return None

    def _selected_file(self) -> Optional[FileStatus]:
        if self.status is None or not self.status.files:
            return None
        row = self.query_one("#file-table", DataTable).cursor_row
        if row is None or not 0 <= row < len(self.status.files):
            return None
        return self.status.files[row]

    def _require_worktree(self) -> Optional[WorktreeInfo]:
        worktree = self._selected_worktree()
        if worktree is None:
            self.notify("No worktree selected", severity="warning")
        elif worktree.is_prunable:
            self.notify("Worktree directory is missing", severity="warning")
            return None
        return worktree

    # Rendering

    def _populate_worktree_table(self) -> None:
        table = self.query_one("#worktree-table", DataTable)
        table.clear()

        for worktree in self.worktrees:
            style_type = get_worktree_style_type(worktree)
            text_color = TUI_COLORS.get(style_type, TUI_COLORS[WorktreeStyleType.NORMAL])
            table.add_row(
                Text(format_worktree_flags(worktree), style=text_color),
                Text(format_worktree_branch(worktree), style=text_color),
                Text(worktree.path, style=text_color),
                format_short_sha(worktree.head),
                format_worktree_notes(worktree),
                key=worktree.path,
            )

        paths = [wt.path for wt in self.worktrees]
        if self.selected_path not in paths:
            self.selected_path = paths[0] if paths else None
        if self.selected_path is not None:
            table.cursor_coordinate = Coordinate(paths.index(self.selected_path), 0)

        self._update_status_bar()

    def _populate_file_table(self) -> None:
        table = self.query_one("#file-table", DataTable)
        saved_row = table.cursor_row
        table.clear()

        files = self.status.files if self.status else []
        for index, file_status in enumerate(files):
            table.add_row(
                format_staged_marker(file_status),
                Text(
                    format_file_state(file_status.status),
                    style=FILE_STATE_COLORS.get(file_status.status, ""),
                ),
                file_status.path,
                key=str(index),
            )

        # Keep the cursor in place across auto-refreshes
        if files and saved_row is not None:
            table.cursor_coordinate = Coordinate(min(saved_row, len(files) - 1), 0)

    def _update_status_bar(self) -> None:
        locked = sum(1 for wt in self.worktrees if wt.is_locked)
        prunable = sum(1 for wt in self.worktrees if wt.is_prunable)
        text = f"{self.manager.repository.name}: {len(self.worktrees)} worktree(s)"
        if locked:
            text += f", {locked} locked"
        if prunable:
            text += f", {prunable} missing"
        self.query_one("#status-bar", Static).update(Text(text))

    # Events

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        if event.data_table.id != "worktree-table" or event.row_key is None:
            return
        path = event.row_key.value
        if path != self.selected_path:
            self.selected_path = path
            self.status = None
            self.load_status()

    def _auto_refresh(self) -> None:
        if self.selected_path is not None:
            self.load_status()

    # Workers

    @work(exclusive=True, group="worktrees", thread=False)
    async def load_worktrees(self) -> None:
        """Reload the worktree list (runs in background)."""
        table = self.query_one("#worktree-table", DataTable)
        try:
            worktrees = await asyncio.to_thread(self.manager.list_worktrees)
        except WorktreeManagerError as e:
            logger.error(f"Error loading worktrees: {e}")
            self.push_screen(InfoScreen(f"Error loading worktrees:\n\n{e}"))
            return
        finally:
            table.loading = False

        self.worktrees = worktrees
        self._populate_worktree_table()
        self.load_status()

    @work(exclusive=True, group="status", thread=False)
    async def load_status(self) -> None:
        """Reload status of the selected worktree (runs in background)."""
        summary = self.query_one("#status-summary", StatusSummary)
        path = self.selected_path
        worktree = self._selected_worktree()

        if worktree is None:
            self.status = None
            summary.show_message("No worktree selected", style="dim")
            self._populate_file_table()
            return
        if worktree.is_prunable:
            self.status = None
            summary.show_message(f"Directory missing: {path}", style="red")
            self._populate_file_table()
            return

        try:
            status = await asyncio.to_thread(self.manager.status, path)
        except WorktreeManagerError as e:
            logger.warning(f"Status failed for {path}: {e}")
            self.status = None
            summary.show_message(str(e), style="red")
            self._populate_file_table()
            return

        # Selection may have moved while git was running
        if path != self.selected_path:
            return
        self.status = status
        summary.show_status(status, path)
        self._populate_file_table()

    @work(group="git", thread=False)
    async def run_git_action(self, description: str, func, *args) -> None:
        """Run a blocking manager call, report the outcome and refresh."""
        self.notify(f"{description}...")
        try:
            await asyncio.to_thread(func, *args)
        except WorktreeManagerError as e:
            logger.error(f"{description} failed: {e}")
            self.notify(str(e), title=f"{description} failed", severity="error", timeout=8)
        else:
            logger.info(f"{description} complete")
            self.notify(f"✓ {description} complete", severity="information")
        self.load_worktrees()

    @work(group="git", thread=False)
    async def remove_worktree(self, path: str, force: bool = False) -> None:
        """Remove a worktree, offering a forced removal when git refuses."""
        try:
            await asyncio.to_thread(self.manager.remove_worktree, path, force)
        except (UncommittedChangesError, WorktreeLockedError) as e:
            logger.info(f"Removal of {path} needs force: {e}")

            def handle_force(confirmed: Optional[bool]) -> None:
                if confirmed:
                    self.remove_worktree(path, force=True)

            self.push_screen(
                ConfirmScreen(f"{e}\n\nForce removal of {path}?", confirm_label="Force remove"),
                handle_force,
            )
            return
        except WorktreeManagerError as e:
            logger.error(f"Removing {path} failed: {e}")
            self.notify(str(e), title="Remove failed", severity="error", timeout=8)
            return

        self.notify(f"✓ Removed {path}", severity="information")
        self.load_worktrees()

    @work(exclusive=True, group="branches", thread=False)
    async def pick_branch(self, worktree_path: str) -> None:
        try:
            branches = await asyncio.to_thread(self.manager.list_branches)
        except WorktreeManagerError as e:
            self.notify(str(e), title="Listing branches failed", severity="error")
            return

        def handle_branch(branch: Optional[str]) -> None:
            if branch:
                self.run_git_action(
                    f"Checkout {branch}", self.manager.checkout, branch, worktree_path
                )

        self.push_screen(BranchPickerScreen(branches), handle_branch)

    @work(exclusive=True, group="repository", thread=False)
    async def switch_repository(self, repository: RepositoryInfo) -> None:
        try:
            manager = await asyncio.to_thread(
                WorktreeManager, repository.path, self.manager.config
            )
        except WorktreeManagerError as e:
            self.notify(str(e), title="Open failed", severity="error")
            return

        self.manager = manager
        self.sub_title = repository.path
        self.selected_path = None
        self.status = None
        self.notify(f"Opened {repository.name}")
        self.load_worktrees()

    # Actions

    def action_refresh(self) -> None:
        self.load_worktrees()

    def action_add_worktree(self) -> None:
        def handle_add(result) -> None:
            if result:
                path, branch, create_branch = result
                self.run_git_action(
                    f"Add worktree {path}", self.manager.add_worktree, path, branch, create_branch
                )

        self.push_screen(AddWorktreeScreen(), handle_add)

    def action_remove_worktree(self) -> None:
        worktree = self._selected_worktree()
        if worktree is None:
            self.notify("No worktree selected", severity="warning")
            return
        if worktree.is_main:
            self.notify("The main worktree cannot be removed", severity="warning")
            return

        def handle_confirm(confirmed: Optional[bool]) -> None:
            if confirmed:
                self.remove_worktree(worktree.path)

        self.push_screen(ConfirmScreen(f"Remove worktree {worktree.path}?"), handle_confirm)

    def action_toggle_lock(self) -> None:
        worktree = self._selected_worktree()
        if worktree is None:
            self.notify("No worktree selected", severity="warning")
            return
        if worktree.is_main:
            self.notify("The main worktree cannot be locked", severity="warning")
            return

        if worktree.is_locked:
            self.run_git_action(
                f"Unlock {worktree.path}", self.manager.unlock_worktree, worktree.path
            )
            return

        def handle_reason(reason: Optional[str]) -> None:
            if reason is not None:
                self.run_git_action(
                    f"Lock {worktree.path}", self.manager.lock_worktree,
                    worktree.path, reason or None,
                )

        self.push_screen(LockScreen(worktree.path), handle_reason)

    def action_fetch(self) -> None:
        worktree = self._require_worktree()
        if worktree:
            self.run_git_action("Fetch", self.manager.fetch, worktree.path)

    def action_pull(self) -> None:
        worktree = self._require_worktree()
        if worktree:
            self.run_git_action("Pull", self.manager.pull, worktree.path)

    def action_push(self) -> None:
        worktree = self._require_worktree()
        if worktree:
            self.run_git_action("Push", self.manager.push, worktree.path)

    def action_stage(self) -> None:
        worktree = self._require_worktree()
        file_status = self._selected_file()
        if worktree is None:
            return
        if file_status is None:
            self.notify("No file selected", severity="warning")
            return
        self.run_git_action(
            f"Stage {file_status.path}", self.manager.stage, file_status.path, worktree.path
        )

    def action_unstage(self) -> None:
        worktree = self._require_worktree()
        file_status = self._selected_file()
        if worktree is None:
            return
        if file_status is None or not file_status.staged:
            self.notify("Select a staged file to unstage", severity="warning")
            return
        self.run_git_action(
            f"Unstage {file_status.path}", self.manager.unstage, file_status.path, worktree.path
        )

    def action_commit(self) -> None:
        worktree = self._require_worktree()
        if worktree is None:
            return
        staged = len(self.status.staged_files) if self.status else 0
        if not staged:
            self.notify("Nothing staged to commit", severity="warning")
            return

        def handle_message(message: Optional[str]) -> None:
            if message:
                self.run_git_action("Commit", self.manager.commit, message, worktree.path)

        self.push_screen(CommitScreen(staged), handle_message)

    def action_checkout(self) -> None:
        worktree = self._require_worktree()
        if worktree:
            self.pick_branch(worktree.path)

    def action_open_repository(self) -> None:
        def handle_repository(repository: Optional[RepositoryInfo]) -> None:
            if repository:
                self.switch_repository(repository)

        self.push_screen(RepositoryPickerScreen(), handle_repository)

    def action_show_legend(self) -> None:
        self.push_screen(InfoScreen(LEGEND_TEXT))

    async def action_quit(self) -> None:
        """Cancel running workers before exiting."""
        self.workers.cancel_all()
        self.exit()
