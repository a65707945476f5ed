"""
Tests for observability — logging setup.
"""

import logging
from pathlib import Path

import pytest

from gomodpin.core.observability.logging_config import (
    ENV_LEVEL,
    _parse_level,
    resolve_level,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    def test_known_levels(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("INFO") == logging.INFO

    def test_unknown_falls_back_to_warning(self):
        assert _parse_level("chatty") == logging.WARNING
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("") == logging.WARNING


class TestResolveLevel:
    def test_flag_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True, environ={}) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True, environ={}) == "INFO"
        assert resolve_level(quiet=True, environ={ENV_LEVEL: "DEBUG"}) == "ERROR"

    def test_environment_fallback(self):
        assert resolve_level(environ={ENV_LEVEL: "INFO"}) == "INFO"
        assert resolve_level(environ={}) == "WARNING"


class TestSetupLogging:
    def test_console_only(self, restore_root_logger):
        setup_logging(level="INFO")
        root = restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_file_handler_lowers_effective_level(self, restore_root_logger, tmp_path: Path):
        log_file = tmp_path / "gomodpin.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("gomodpin.test").debug("hello file")
        for handler in root.handlers:
            handler.flush()
        assert "hello file" in log_file.read_text()

        for handler in root.handlers:
            handler.close()

    def test_console_format_tiers(self, restore_root_logger):
        setup_logging(level="WARNING")
        assert restore_root_logger.handlers[0].formatter._fmt == "%(message)s"
        setup_logging(level="DEBUG")
        assert "%(lineno)d" in restore_root_logger.handlers[0].formatter._fmt

    def test_reconfigure_replaces_handlers(self, restore_root_logger):
        setup_logging(level="INFO")
        setup_logging(level="ERROR")
        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.ERROR
