"""Modal screens for git-worktree-manager TUI."""

from pathlib import Path
from typing import List, Optional, Tuple

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, DirectoryTree, Input, OptionList, Static
from textual.widgets.option_list import Option
from rich.text import Text

from git_worktree_manager.exceptions import WorktreeManagerError
from git_worktree_manager.formatters import format_branch_name
from git_worktree_manager.models import BranchInfo, RepositoryInfo
from git_worktree_manager.services.repository_service import RepositoryService
from git_worktree_manager.utils.logging import get_logger

logger = get_logger(__name__)

# Layout shared by every dialog below
DIALOG_CSS = """
    {screen} {{
        align: center middle;
    }}

    #dialog {{
        width: 80%;
        height: auto;
        max-height: 90%;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }}

    #message {{
        width: 100%;
        height: auto;
        padding: 1 0;
    }}

    #button-container {{
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0;
    }}

    Button {{
        margin: 0 1;
    }}
"""


class ConfirmScreen(ModalScreen[bool]):
    """Modal confirmation dialog."""

    DEFAULT_CSS = DIALOG_CSS.format(screen="ConfirmScreen")

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, message: str, confirm_label: str = "Yes"):
        super().__init__()
        self.message = message
        self.confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self.message, id="message", markup=False)
            with Container(id="button-container"):
                yield Button(self.confirm_label, variant="error", id="yes")
                yield Button("No", variant="primary", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_cancel(self) -> None:
        self.dismiss(False)


class InfoScreen(ModalScreen):
    """Modal info display dialog, used for errors and the legend."""

    DEFAULT_CSS = DIALOG_CSS.format(screen="InfoScreen")

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("enter", "close", "Close", show=False),
    ]

    def __init__(self, info: str):
        super().__init__()
        self.info = info

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self.info, id="message", markup=False)
            with Container(id="button-container"):
                yield Button("Close", variant="primary", id="close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss()

    def action_close(self) -> None:
        self.dismiss()


class AddWorktreeScreen(ModalScreen[Optional[Tuple[str, str, bool]]]):
    """Ask for the path and branch of a new worktree.

    Dismisses with ``(path, branch, create_branch)`` or None when cancelled.
    Relative paths are resolved against the repository by the service layer.
    """

    DEFAULT_CSS = DIALOG_CSS.format(screen="AddWorktreeScreen")

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static("[bold]Add worktree[/bold]", id="message")
            yield Input(placeholder="Path, e.g. ../feature-x", id="path")
            yield Input(placeholder="Branch", id="branch")
            yield Checkbox("Create new branch", id="create-branch")
            with Container(id="button-container"):
                yield Button("Create", variant="success", id="create")
                yield Button("Cancel", variant="primary", id="cancel")

    def _submit(self) -> None:
        path = self.query_one("#path", Input).value.strip()
        branch = self.query_one("#branch", Input).value.strip()
        if not path or not branch:
            self.notify("Path and branch are required", severity="warning")
            return
        self.dismiss((path, branch, self.query_one("#create-branch", Checkbox).value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "create":
            self._submit()
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class TextPromptScreen(ModalScreen[Optional[str]]):
    """Single-line text prompt. Dismisses with the entered text or None."""

    DEFAULT_CSS = DIALOG_CSS.format(screen="TextPromptScreen")

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, title: str, placeholder: str = "", submit_label: str = "OK",
                 allow_empty: bool = False):
        super().__init__()
        self.title_text = title
        self.placeholder = placeholder
        self.submit_label = submit_label
        self.allow_empty = allow_empty

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self.title_text, id="message", markup=False)
            yield Input(placeholder=self.placeholder, id="prompt-input")
            with Container(id="button-container"):
                yield Button(self.submit_label, variant="success", id="submit")
                yield Button("Cancel", variant="primary", id="cancel")

    def _submit(self) -> None:
        value = self.query_one("#prompt-input", Input).value.strip()
        if not value and not self.allow_empty:
            self.notify("A value is required", severity="warning")
            return
        self.dismiss(value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            self._submit()
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class CommitScreen(TextPromptScreen):
    """Prompt for a commit message."""

    DEFAULT_CSS = DIALOG_CSS.format(screen="CommitScreen")

    def __init__(self, staged_count: int):
        super().__init__(
            f"Commit {staged_count} staged change(s)",
            placeholder="Commit message",
            submit_label="Commit",
        )


class LockScreen(TextPromptScreen):
    """Prompt for an optional lock reason. Empty input means no reason."""

    DEFAULT_CSS = DIALOG_CSS.format(screen="LockScreen")

    def __init__(self, worktree_path: str):
        super().__init__(
            f"Lock worktree {worktree_path}",
            placeholder="Reason (optional)",
            submit_label="Lock",
            allow_empty=True,
        )


class BranchPickerScreen(ModalScreen[Optional[str]]):
    """Pick a branch to check out. Dismisses with the branch name or None."""

    DEFAULT_CSS = DIALOG_CSS.format(screen="BranchPickerScreen") + """
    OptionList {
        height: auto;
        max-height: 20;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, branches: List[BranchInfo]):
        super().__init__()
        self.branches = branches
        # Option ids must be unique; a local "origin/x" can sit next to the remote one
        self.branch_names = {self.option_id(b): b.name for b in branches}

    @staticmethod
    def option_id(branch: BranchInfo) -> str:
        return f"{'remote' if branch.is_remote else 'local'}:{branch.name}"

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static("[bold]Check out branch[/bold]", id="message")
            yield OptionList(
                *[Option(Text(format_branch_name(b)), id=self.option_id(b)) for b in self.branches],
                id="branch-list",
            )
            with Container(id="button-container"):
                yield Button("Cancel", variant="primary", id="cancel")

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(self.branch_names[event.option.id])

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class RepositoryPickerScreen(ModalScreen[Optional[RepositoryInfo]]):
    """Browse for a repository directory.

    Selecting a directory that is a git repository dismisses with its
    RepositoryInfo; anything else keeps the picker open.
    """

    DEFAULT_CSS = DIALOG_CSS.format(screen="RepositoryPickerScreen") + """
    #dialog {
        height: 80%;
    }

    DirectoryTree {
        height: 1fr;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, start_path: Optional[str] = None):
        super().__init__()
        self.start_path = start_path or str(Path.home())

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static("[bold]Open repository[/bold] (select a directory)", id="message")
            yield DirectoryTree(self.start_path, id="directory-tree")
            with Container(id="button-container"):
                yield Button("Cancel", variant="primary", id="cancel")

    def on_directory_tree_directory_selected(self, event: DirectoryTree.DirectorySelected) -> None:
        path = str(event.path)
        try:
            if not RepositoryService.validate_repo(path):
                self.notify(f"Not a git repository: {path}", severity="warning")
                return
            repository = RepositoryService.open_repository(path)
        except WorktreeManagerError as e:
            logger.warning(f"Cannot open {path}: {e}")
            self.notify(str(e), severity="error")
            return
        self.dismiss(repository)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
