"""Command-line argument parsing for git-worktree-manager."""

import argparse

from git_worktree_manager.__version__ import __version__


def _add_optional_worktree(parser):
    parser.add_argument(
        "path", nargs="?", default=None,
        help="Worktree to operate on (default: the repository)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="git-worktree-manager",
        description="Manage git worktrees, branches and everyday git operations",
        epilog="Run without a command to open the interactive TUI (when attached to a terminal).",
    )
    parser.add_argument(
        "-C", "--repo", default=None, metavar="PATH",
        help="Repository to manage (default: current directory)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--remote", default="origin",
        help="Remote used for ahead/behind when a branch has no upstream (default: origin)",
    )
    parser.add_argument("--version", action="version", version=f"git-worktree-manager {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # Worktrees
    list_parser = subparsers.add_parser("list", help="List worktrees")
    list_parser.add_argument("--legend", action="store_true", help="Show a legend below the table")

    add_parser = subparsers.add_parser("add", help="Create a worktree")
    add_parser.add_argument("path", help="Directory for the new worktree")
    add_parser.add_argument("branch", help="Branch to check out")
    add_parser.add_argument(
        "-b", "--create-branch", action="store_true", help="Create the branch from HEAD"
    )

    remove_parser = subparsers.add_parser("remove", help="Remove a worktree")
    remove_parser.add_argument("path", help="Worktree to remove")
    remove_parser.add_argument(
        "--force", action="store_true",
        help="Remove even when locked or with uncommitted changes",
    )

    lock_parser = subparsers.add_parser("lock", help="Lock a worktree")
    lock_parser.add_argument("path", help="Worktree to lock")
    lock_parser.add_argument("--reason", default=None, help="Why the worktree is locked")

    unlock_parser = subparsers.add_parser("unlock", help="Unlock a worktree")
    unlock_parser.add_argument("path", help="Worktree to unlock")

    subparsers.add_parser("prune", help="Prune metadata of worktrees whose directory is gone")

    # Porcelain
    status_parser = subparsers.add_parser("status", help="Show status of a worktree")
    _add_optional_worktree(status_parser)

    stage_parser = subparsers.add_parser("stage", help="Stage a file")
    stage_parser.add_argument("path", help="Worktree containing the file")
    stage_parser.add_argument("file", help="File to stage, relative to the worktree")

    unstage_parser = subparsers.add_parser("unstage", help="Unstage a file")
    unstage_parser.add_argument("path", help="Worktree containing the file")
    unstage_parser.add_argument("file", help="File to unstage, relative to the worktree")

    commit_parser = subparsers.add_parser("commit", help="Commit staged changes")
    _add_optional_worktree(commit_parser)
    commit_parser.add_argument("-m", "--message", required=True, help="Commit message")

    for name, help_text in (
        ("fetch", "Fetch all remotes"),
        ("pull", "Pull the current branch"),
        ("push", "Push the current branch"),
    ):
        _add_optional_worktree(subparsers.add_parser(name, help=help_text))

    # Branches
    subparsers.add_parser("branches", help="List local and remote branches")

    checkout_parser = subparsers.add_parser("checkout", help="Check out a branch")
    checkout_parser.add_argument("branch", help="Branch to check out")
    checkout_parser.add_argument(
        "--worktree", default=None, metavar="PATH",
        help="Worktree to switch (default: the repository)",
    )

    # Front ends
    subparsers.add_parser("open", help="Show repository information")
    subparsers.add_parser("tui", help="Launch the interactive TUI")

    invoke_parser = subparsers.add_parser(
        "invoke", help="Run a JSON command request and print the JSON reply"
    )
    invoke_parser.add_argument(
        "request", nargs="?", default=None,
        help='JSON request, e.g. \'{"command": "list_worktrees", "args": {...}}\' (default: read stdin)',
    )

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
