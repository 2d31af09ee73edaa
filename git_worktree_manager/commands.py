"""UI command layer for git-worktree-manager.

One function per user action. Arguments are plain strings and booleans and
return values are JSON-ready (dicts, lists, strings or None), so a desktop
shell can drive the backend through :func:`invoke_json` without knowing
anything about the model classes.
"""

import inspect
import json
from typing import Any, Callable, Dict, List, Optional, get_type_hints

from git_worktree_manager.config import Config
from git_worktree_manager.exceptions import UnknownCommandError, WorktreeManagerError
from git_worktree_manager.services.git import BranchQueries, GitOperations, WorktreeService
from git_worktree_manager.services.repository_service import RepositoryService
from git_worktree_manager.utils.logging import get_logger

logger = get_logger(__name__)

# Shared by every command; front ends may replace it via set_config()
_config = Config()


def set_config(config: Config) -> None:
    """Use ``config`` for all subsequent commands."""
    global _config
    _config = config


# Repository commands

def open_repository(path: str) -> dict:
    return RepositoryService.open_repository(path).to_dict()


def validate_repo(path: str) -> bool:
    return RepositoryService.validate_repo(path)


# Worktree commands

def list_worktrees(repo_path: str) -> List[dict]:
    return [wt.to_dict() for wt in WorktreeService(repo_path, _config).list_worktrees()]


def add_worktree(repo_path: str, worktree_path: str, branch: str, create_branch: bool) -> None:
    WorktreeService(repo_path, _config).add_worktree(worktree_path, branch, create_branch)


def remove_worktree(repo_path: str, worktree_path: str, force: bool) -> None:
    WorktreeService(repo_path, _config).remove_worktree(worktree_path, force)


def lock_worktree(repo_path: str, worktree_path: str, reason: Optional[str] = None) -> None:
    WorktreeService(repo_path, _config).lock_worktree(worktree_path, reason)


def unlock_worktree(repo_path: str, worktree_path: str) -> None:
    WorktreeService(repo_path, _config).unlock_worktree(worktree_path)


def prune_worktrees(repo_path: str) -> None:
    WorktreeService(repo_path, _config).prune_worktrees()


# Git operations

def git_fetch(worktree_path: str) -> str:
    return GitOperations(worktree_path, _config).fetch()


def git_pull(worktree_path: str) -> str:
    return GitOperations(worktree_path, _config).pull()


def git_push(worktree_path: str) -> str:
    return GitOperations(worktree_path, _config).push()


def git_status(worktree_path: str) -> dict:
    return GitOperations(worktree_path, _config).status().to_dict()


def git_commit(worktree_path: str, message: str) -> str:
    return GitOperations(worktree_path, _config).commit(message)


def git_stage(worktree_path: str, file_path: str) -> None:
    GitOperations(worktree_path, _config).stage(file_path)


def git_unstage(worktree_path: str, file_path: str) -> None:
    GitOperations(worktree_path, _config).unstage(file_path)


# Branch operations

def list_branches(repo_path: str) -> List[dict]:
    return [b.to_dict() for b in BranchQueries(repo_path, _config).list_branches()]


def checkout_branch(worktree_path: str, branch: str) -> None:
    GitOperations(worktree_path, _config).checkout(branch)


COMMANDS: Dict[str, Callable[..., Any]] = {
    # Repository commands
    "open_repository": open_repository,
    "validate_repo": validate_repo,
    # Worktree commands
    "list_worktrees": list_worktrees,
    "add_worktree": add_worktree,
    "remove_worktree": remove_worktree,
    "lock_worktree": lock_worktree,
    "unlock_worktree": unlock_worktree,
    "prune_worktrees": prune_worktrees,
    # Git operations
    "git_fetch": git_fetch,
    "git_pull": git_pull,
    "git_push": git_push,
    "git_status": git_status,
    "git_commit": git_commit,
    "git_stage": git_stage,
    "git_unstage": git_unstage,
    # Branch operations
    "list_branches": list_branches,
    "checkout_branch": checkout_branch,
}


def invoke(name: str, **kwargs: Any) -> Any:
    """Run a registered command by name.

    Raises:
        UnknownCommandError: No command is registered under ``name``
        WorktreeManagerError: Whatever the command raised
    """
    command = COMMANDS.get(name)
    if command is None:
        raise UnknownCommandError(name)
    logger.debug(f"Invoking {name}({', '.join(f'{k}={v!r}' for k, v in kwargs.items())})")
    return command(**kwargs)


def _check_arg_types(command: Callable[..., Any], args: Dict[str, Any]) -> Optional[str]:
    """Return a message for the first argument whose JSON type doesn't fit, else None."""
    hints = get_type_hints(command)
    for name, value in args.items():
        expected = hints.get(name)
        if expected is bool and not isinstance(value, bool):
            return f"{name} must be a boolean"
        if expected is str and not isinstance(value, str):
            return f"{name} must be a string"
        if expected == Optional[str] and value is not None and not isinstance(value, str):
            return f"{name} must be a string or null"
    return None


def invoke_json(request: str) -> str:
    """Run a command described by a JSON request and return a JSON reply.

    Request: ``{"command": "<name>", "args": {...}}``

    Reply: ``{"ok": true, "data": ...}`` or ``{"ok": false, "error": "<message>"}``
    """
    try:
        payload = json.loads(request)
    except json.JSONDecodeError as e:
        return json.dumps({"ok": False, "error": f"Invalid request: {e}"})

    if not isinstance(payload, dict) or not isinstance(payload.get("command"), str):
        return json.dumps({"ok": False, "error": "Invalid request: missing command"})

    args = payload.get("args") or {}
    if not isinstance(args, dict):
        return json.dumps({"ok": False, "error": "Invalid request: args must be an object"})

    name = payload["command"]
    command = COMMANDS.get(name)
    if command is not None:
        try:
            inspect.signature(command).bind(**args)
        except TypeError as e:
            return json.dumps({"ok": False, "error": f"Invalid request: {e}"})
        type_error = _check_arg_types(command, args)
        if type_error:
            return json.dumps({"ok": False, "error": f"Invalid request: {type_error}"})

    try:
        data = invoke(name, **args)
    except WorktreeManagerError as e:
        logger.info(f"Command {name} failed: {e}")
        return json.dumps({"ok": False, "error": str(e)})
    except TypeError as e:
        logger.warning(f"Command {name} rejected its arguments: {e}")
        return json.dumps({"ok": False, "error": f"Invalid request: {e}"})

    return json.dumps({"ok": True, "data": data})
