"""Tests for logging configuration"""
import logging
from unittest.mock import patch

import pytest

from git_worktree_manager.utils import logging as logging_utils
from git_worktree_manager.utils.logging import ColoredFormatter, get_logger, setup_logging


@pytest.fixture
def clean_root_logger(temp_dir):
    """Send log files to a temp dir and drop the handlers a test installed."""
    root = logging.getLogger()
    saved_level = root.level
    with patch.object(logging_utils, "LOG_DIR", temp_dir / "logs"):
        yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(saved_level)


def _handler_types(root):
    return sorted(type(h).__name__ for h in root.handlers)


class TestSetupLogging:
    """Test handler and level selection."""

    def test_default_warning(self, clean_root_logger):
        """Test the default is a WARNING console handler."""
        setup_logging()
        assert _handler_types(clean_root_logger) == ["StreamHandler"]
        assert clean_root_logger.handlers[0].level == logging.WARNING

    def test_verbose_info(self, clean_root_logger):
        """Test --verbose lowers the console level to INFO."""
        setup_logging(verbose=True)
        assert clean_root_logger.handlers[0].level == logging.INFO

    def test_debug_adds_file(self, clean_root_logger, temp_dir):
        """Test debug logs to console and file."""
        setup_logging(debug=True)
        assert _handler_types(clean_root_logger) == ["FileHandler", "StreamHandler"]
        assert (temp_dir / "logs" / logging_utils.LOG_FILE_NAME).exists()

    def test_tui_mode_file_only(self, clean_root_logger, temp_dir):
        """Test the TUI logs only to the file."""
        setup_logging(tui_mode=True)
        assert _handler_types(clean_root_logger) == ["FileHandler"]

        get_logger("git_worktree_manager.tui").info("hello from the tui")
        for handler in clean_root_logger.handlers:
            handler.flush()
        log_text = (temp_dir / "logs" / logging_utils.LOG_FILE_NAME).read_text()
        assert "hello from the tui" in log_text

    def test_returns_log_file(self, clean_root_logger, temp_dir):
        """Test the log file path is returned only when a file is written."""
        assert setup_logging() is None
        assert setup_logging(tui_mode=True) == temp_dir / "logs" / logging_utils.LOG_FILE_NAME

    def test_gitpython_logger_held_at_info(self, clean_root_logger):
        """Test GitPython's per-command debug lines stay out of the log."""
        setup_logging(debug=True)
        assert not logging.getLogger("git.cmd").isEnabledFor(logging.DEBUG)
        assert get_logger("git_worktree_manager.services.git.runner").isEnabledFor(logging.DEBUG)

    def test_repeated_setup_replaces_handlers(self, clean_root_logger):
        """Test calling setup twice doesn't duplicate handlers."""
        setup_logging()
        setup_logging()
        assert len(clean_root_logger.handlers) == 1


class TestGetLogger:
    """Test logger naming."""

    def test_strips_package_prefix(self):
        """Test the package prefix is removed."""
        assert get_logger("git_worktree_manager.core").name == "core"

    def test_keeps_services_prefix(self):
        """Test service loggers don't nest under GitPython's 'git' logger."""
        name = get_logger("git_worktree_manager.services.git.runner").name
        assert name == "services.git.runner"

    def test_other_names_untouched(self):
        """Test foreign names pass through."""
        assert get_logger("somewhere.else").name == "somewhere.else"


class TestColoredFormatter:
    """Test level coloring."""

    def _record(self):
        return logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)

    def test_plain_when_not_a_tty(self):
        """Test no escape codes without a terminal."""
        with patch("sys.stderr") as stderr:
            stderr.isatty.return_value = False
            text = ColoredFormatter(fmt="%(levelname)s %(message)s").format(self._record())
        assert text == "ERROR boom"

    def test_colored_on_tty(self):
        """Test escape codes on a terminal without touching the record."""
        record = self._record()
        with patch("sys.stderr") as stderr:
            stderr.isatty.return_value = True
            text = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert text == "\033[31mERROR\033[0m boom"
        assert record.levelname == "ERROR"
