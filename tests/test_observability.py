"""
Tests for observability — log level resolution and handler setup.
"""

import logging

import pytest

from pth_manager.core.observability.logging_config import resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_default_is_warning(self):
        assert resolve_level() == "WARNING"

    def test_env_default(self):
        assert resolve_level(default="INFO") == "INFO"

    def test_debug_wins(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"

    def test_verbose_over_quiet(self):
        assert resolve_level(verbose=True, quiet=True) == "INFO"

    def test_quiet(self):
        assert resolve_level(quiet=True, default="DEBUG") == "ERROR"


class TestSetupLogging:
    def test_single_console_handler(self):
        setup_logging("WARNING")
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_unknown_level_falls_back(self):
        setup_logging("NOPE")
        assert logging.getLogger().level == logging.WARNING

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "pthm.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG

        logging.getLogger("pth_manager.test").debug("written to file only")
        for handler in root.handlers:
            handler.flush()
        assert "written to file only" in log_file.read_text()
