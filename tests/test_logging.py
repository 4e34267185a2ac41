"""
Tests for logging configuration module.
"""

import logging
import tempfile
from pathlib import Path

from brew_pretty.common import env_flag, vlog
from brew_pretty.logging_config import (
    ColoredFormatter,
    get_logger,
    setup_logging,
)


def _record(level=logging.INFO, msg="Test message"):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSetupLogging:
    """Test logging setup and configuration."""

    def test_setup_logging_default(self):
        """Test default logging setup."""
        logger = setup_logging()
        assert logger.name == "brew_pretty"
        assert logger.level == logging.WARNING

    def test_setup_logging_verbose(self):
        """Test verbose logging enables DEBUG level."""
        logger = setup_logging(verbose=True)
        assert logger.level == logging.DEBUG

    def test_setup_logging_quiet(self):
        """Test quiet mode only shows errors."""
        logger = setup_logging(quiet=True)
        assert logger.level == logging.ERROR

    def test_console_handler_uses_stderr(self):
        """Test that logs never mix with the report on stdout."""
        import sys

        logger = setup_logging()
        stream_handlers = [
            h for h in logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].stream is sys.stderr

    def test_setup_logging_with_file(self):
        """Test logging to file captures debug messages."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "logs" / "brew-pretty.log"
            logger = setup_logging(log_file=str(log_file))

            logger.debug("Debug detail")
            for handler in logger.handlers:
                handler.flush()

            assert log_file.exists()
            assert "Debug detail" in log_file.read_text()
            for handler in logger.handlers:
                handler.close()

    def test_setup_logging_custom_level(self):
        """Test custom log level."""
        logger = setup_logging(level="info")
        assert logger.level == logging.INFO


class TestGetLogger:
    """Test logger retrieval."""

    def test_get_logger_singleton(self):
        """Test get_logger returns same instance."""
        assert get_logger() is get_logger()

    def test_get_logger_after_setup(self):
        """Test get_logger returns the configured logger."""
        logger = setup_logging(verbose=True)
        assert get_logger() is logger


class TestColoredFormatter:
    """Test colored log formatter."""

    def test_colored_formatter_with_colors(self):
        """Test formatter with colors enabled."""
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=True)
        formatted = formatter.format(_record(logging.WARNING))
        assert "Test message" in formatted
        assert "\033[33m" in formatted

    def test_colored_formatter_without_colors(self):
        """Test formatter with colors disabled."""
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=False)
        formatted = formatter.format(_record(logging.ERROR))
        assert formatted == "[ERROR] Test message"


class TestCommon:
    """Tests for shared helpers."""

    def test_env_flag(self):
        """Test boolean parsing of environment flags."""
        assert env_flag("X", False, {"X": "yes"}) is True
        assert env_flag("X", True, {"X": "0"}) is False
        assert env_flag("X", True, {}) is True
        assert env_flag("X", False, {"X": "maybe"}) is False

    def test_vlog_verbose(self):
        """Test that vlog logs in verbose mode."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "vlog.log"
            logger = setup_logging(log_file=str(log_file))
            vlog("Loading config", verbose=True)
            vlog("Hidden", verbose=False)
            for handler in logger.handlers:
                handler.flush()
            content = log_file.read_text()
            for handler in logger.handlers:
                handler.close()

        assert "Loading config" in content
        assert "Hidden" not in content


class TestLoggerIsolation:
    """Tests that logging state does not leak between tests."""

    def test_first_binds_temporary_file(self):
        """Test binding the logger to a file in a directory that is then removed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_file=str(Path(tmpdir) / "isolation.log"))

    def test_second_logs_warning(self):
        """Test that a warning after the previous test does not hit the removed file."""
        logger = get_logger()
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        logger.warning("Still works")
