"""Logging configuration for git-worktree-manager"""
import logging
import sys
from pathlib import Path
from typing import Optional

LOG_DIR = Path.home() / '.git-worktree-manager'
LOG_FILE_NAME = 'git-worktree-manager.log'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        """Format log record with colors if stderr is a terminal."""
        if sys.stderr.isatty():
            levelname = record.levelname
            if levelname in self.COLORS:
                # Work on a copy so other handlers see the plain level name
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        return super().format(record)


def setup_logging(verbose: bool = False, debug: bool = False, tui_mode: bool = False) -> Optional[Path]:
    """
    Configure logging for the CLI and the TUI.

    The console handler writes to stderr at WARNING, INFO with ``verbose`` or
    DEBUG with ``debug``. The TUI draws over the whole terminal, so in TUI
    mode nothing goes to stderr and every record at DEBUG goes to
    ``~/.git-worktree-manager/git-worktree-manager.log`` instead. ``debug``
    writes that file too. The file is truncated on each start, so it only
    ever holds the last session.

    GitPython's own ``git`` logger is held at INFO: it would otherwise repeat
    every command the runner already logs.

    Args:
        verbose: Show INFO messages on stderr
        debug: Show DEBUG messages on stderr with timestamps, and write the log file
        tui_mode: Write the log file only

    Returns:
        Path of the log file, or None when only stderr is used
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    # The file handler wants everything; handlers filter what they emit
    root_logger.setLevel(logging.DEBUG if tui_mode else level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    logging.getLogger('git').setLevel(logging.INFO)

    log_file = None
    if tui_mode or debug:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = LOG_DIR / LOG_FILE_NAME
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    if not tui_mode:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if debug:
            formatter = ColoredFormatter(
                fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        else:
            formatter = ColoredFormatter(fmt='[%(name)s] %(message)s')

        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    return log_file


def get_logger(name: str) -> logging.Logger:
    """Logger for a module of this package, named without the package prefix."""
    # Strip the package prefix for cleaner log names. "services." is kept so
    # that services.git.* never nests under GitPython's own "git" logger.
    if name.startswith('git_worktree_manager.'):
        name = name.replace('git_worktree_manager.', '', 1)

    return logging.getLogger(name)
