"""Command-line interface for git-worktree-manager"""

import json
import os
import sys

from rich.console import Console
from rich.markup import escape

from git_worktree_manager.cli.args import parse_args
from git_worktree_manager.commands import invoke_json, set_config
from git_worktree_manager.config import Config
from git_worktree_manager.core import WorktreeManager
from git_worktree_manager.exceptions import WorktreeManagerError
from git_worktree_manager.services.display_service import DisplayService
from git_worktree_manager.utils.logging import setup_logging

console = Console()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def _abspath(path):
    """Paths typed by the user are relative to the shell's cwd, not the repository."""
    return os.path.abspath(path) if path else None


def _cmd_list(manager, args, display):
    display.display_worktree_table(manager.list_worktrees(), show_legend=args.legend)


def _cmd_add(manager, args, display):
    path = _abspath(args.path)
    manager.add_worktree(path, args.branch, args.create_branch)
    display.success(f"Created worktree {path} on branch {args.branch}")


def _cmd_remove(manager, args, display):
    path = _abspath(args.path)
    manager.remove_worktree(path, args.force)
    display.success(f"Removed worktree {path}")


def _cmd_lock(manager, args, display):
    path = _abspath(args.path)
    manager.lock_worktree(path, args.reason)
    display.success(f"Locked worktree {path}")


def _cmd_unlock(manager, args, display):
    path = _abspath(args.path)
    manager.unlock_worktree(path)
    display.success(f"Unlocked worktree {path}")


def _cmd_prune(manager, args, display):
    manager.prune_worktrees()
    display.success("Pruned stale worktree metadata")


def _cmd_status(manager, args, display):
    path = _abspath(args.path)
    display.display_status(manager.status(path), path)


def _cmd_stage(manager, args, display):
    manager.stage(args.file, _abspath(args.path))
    display.success(f"Staged {args.file}")


def _cmd_unstage(manager, args, display):
    manager.unstage(args.file, _abspath(args.path))
    display.success(f"Unstaged {args.file}")


def _cmd_commit(manager, args, display):
    display.display_output(manager.commit(args.message, _abspath(args.path)))


def _cmd_fetch(manager, args, display):
    display.display_output(manager.fetch(_abspath(args.path)))
    display.success("Fetch complete")


def _cmd_pull(manager, args, display):
    display.display_output(manager.pull(_abspath(args.path)))
    display.success("Pull complete")


def _cmd_push(manager, args, display):
    display.display_output(manager.push(_abspath(args.path)))
    display.success("Push complete")


def _cmd_branches(manager, args, display):
    display.display_branch_table(manager.list_branches())


def _cmd_checkout(manager, args, display):
    manager.checkout(args.branch, _abspath(args.worktree))
    display.success(f"Switched to {args.branch}")


def _cmd_open(manager, args, display):
    display.display_repository(manager.repository)


HANDLERS = {
    "list": _cmd_list,
    "add": _cmd_add,
    "remove": _cmd_remove,
    "lock": _cmd_lock,
    "unlock": _cmd_unlock,
    "prune": _cmd_prune,
    "status": _cmd_status,
    "stage": _cmd_stage,
    "unstage": _cmd_unstage,
    "commit": _cmd_commit,
    "fetch": _cmd_fetch,
    "pull": _cmd_pull,
    "push": _cmd_push,
    "branches": _cmd_branches,
    "checkout": _cmd_checkout,
    "open": _cmd_open,
}


def run_invoke(request=None) -> int:
    """Answer one JSON request on stdout. Exit code mirrors the reply's ok flag."""
    if request is None:
        request = sys.stdin.read()
    reply = invoke_json(request)
    # Plain print: rich would wrap long lines and break the JSON
    print(reply)
    return EXIT_OK if json.loads(reply)["ok"] else EXIT_ERROR


def main(argv=None):
    """Main entry point for the application."""
    debug = False
    try:
        parsed_args = parse_args(argv)
        debug = parsed_args.debug

        # Default to the TUI when attached to a terminal
        command = parsed_args.command
        if command is None:
            command = "tui" if sys.stdin.isatty() else "list"

        # The TUI owns the terminal, so its logs go to a file
        log_file = setup_logging(verbose=parsed_args.verbose, debug=debug, tui_mode=command == "tui")

        config = Config(
            remote_name=parsed_args.remote,
            verbose=parsed_args.verbose,
            debug=debug,
        )
        set_config(config)

        if debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")
            console.print(f"[yellow]Log file:[/yellow] {escape(str(log_file))}")

        if command == "invoke":
            return run_invoke(parsed_args.request)

        repo_path = os.path.abspath(parsed_args.repo or os.getcwd())
        manager = WorktreeManager(repo_path, config)

        if command == "tui":
            from git_worktree_manager.tui import WorktreeManagerApp
            WorktreeManagerApp(manager).run()
            return EXIT_OK

        if command == "list" and parsed_args.command is None:
            parsed_args.legend = False

        display = DisplayService(console, verbose=parsed_args.verbose)
        HANDLERS[command](manager, parsed_args, display)
        return EXIT_OK
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return EXIT_INTERRUPTED
    except (WorktreeManagerError, ValueError) as e:
        console.print(f"Error: {e}", style="red", markup=False, highlight=False)
        return EXIT_ERROR
    except Exception as e:
        console.print(f"Unexpected error: {e}", style="red", markup=False, highlight=False)
        if debug:
            console.print_exception()
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
