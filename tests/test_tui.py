"""Tests for the Textual TUI"""
import asyncio
from pathlib import Path

from textual.widgets import DataTable, OptionList

from git_worktree_manager.constants import FILE_COLUMNS, WORKTREE_COLUMNS
from git_worktree_manager.core import WorktreeManager
from git_worktree_manager.models import BranchInfo
from git_worktree_manager.tui import WorktreeManagerApp
from git_worktree_manager.ui.screens import BranchPickerScreen, ConfirmScreen, InfoScreen


async def settle(app, pilot):
    """Let chained background workers (worktrees -> status) finish."""
    for _ in range(3):
        await app.workers.wait_for_complete()
        await pilot.pause()


def run_app(repo_path, scenario):
    async def runner():
        app = WorktreeManagerApp(WorktreeManager(repo_path))
        async with app.run_test(size=(160, 40)) as pilot:
            await settle(app, pilot)
            await scenario(app, pilot)
    asyncio.run(runner())


class TestWorktreeManagerApp:
    """Test the interactive app against a real repository."""

    def test_lists_worktrees_and_status(self, repo_path, linked_worktree):
        """Test the table shows every worktree and the main one is selected."""
        async def scenario(app, pilot):
            assert app.query_one("#worktree-table", DataTable).row_count == 2
            assert app.selected_path == app.worktrees[0].path
            assert app.status is not None
            assert app.status.branch == "main"

        run_app(repo_path, scenario)

    def test_columns_follow_shared_definitions(self, repo_path):
        """Test both tables use the column keys shared with the CLI."""
        async def scenario(app, pilot):
            worktree_table = app.query_one("#worktree-table", DataTable)
            file_table = app.query_one("#file-table", DataTable)
            assert [key.value for key in worktree_table.columns] == [c.key for c in WORKTREE_COLUMNS]
            assert [key.value for key in file_table.columns] == [c.key for c in FILE_COLUMNS]

        run_app(repo_path, scenario)

    def test_stage_selected_file(self, repo_path):
        """Test pressing 's' stages the highlighted file."""
        (Path(repo_path) / "tui.txt").write_text("tui\n")

        async def scenario(app, pilot):
            assert app.query_one("#file-table", DataTable).row_count == 1
            await pilot.press("s")
            await settle(app, pilot)
            assert [f.staged for f in app.status.files] == [True]

        run_app(repo_path, scenario)

    def test_legend(self, repo_path):
        """Test '?' opens the legend."""
        async def scenario(app, pilot):
            await pilot.press("question_mark")
            await pilot.pause()
            assert isinstance(app.screen, InfoScreen)

        run_app(repo_path, scenario)

    def test_remove_main_is_refused(self, repo_path):
        """Test removing the main worktree asks nothing and keeps it."""
        async def scenario(app, pilot):
            await pilot.press("d")
            await pilot.pause()
            assert not isinstance(app.screen, ConfirmScreen)
            assert len(app.worktrees) == 1

        run_app(repo_path, scenario)

    def test_remove_linked_after_confirm(self, repo_path, linked_worktree):
        """Test removing a linked worktree after confirming."""
        async def scenario(app, pilot):
            table = app.query_one("#worktree-table", DataTable)
            table.move_cursor(row=1)
            await settle(app, pilot)
            assert app.selected_path == app.worktrees[1].path

            await pilot.press("d")
            await pilot.pause()
            assert isinstance(app.screen, ConfirmScreen)
            await pilot.click("#yes")
            await settle(app, pilot)
            assert len(app.worktrees) == 1

        run_app(repo_path, scenario)
        assert not Path(linked_worktree).exists()

    def test_branch_picker_local_and_remote_same_name(self, repo_path):
        """Test a local branch named like a remote one gets its own option."""
        branches = [
            BranchInfo(name="origin/x", is_remote=False, is_current=False),
            BranchInfo(name="origin/x", is_remote=True, is_current=False),
        ]
        picked = []

        async def scenario(app, pilot):
            app.push_screen(BranchPickerScreen(branches), picked.append)
            await pilot.pause()
            option_list = app.screen.query_one("#branch-list", OptionList)
            assert option_list.option_count == 2

            option_list.focus()
            option_list.highlighted = 1
            await pilot.press("enter")
            await pilot.pause()

        run_app(repo_path, scenario)
        assert picked == ["origin/x"]
