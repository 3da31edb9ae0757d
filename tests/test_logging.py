"""
Tests for logging setup — level resolution, handlers, file output.
"""

import logging
from pathlib import Path

import pytest

from mglgen.core.observability.logging_config import _console_format, _level_number, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True) == "INFO"
        assert resolve_level(quiet=True, env_level="DEBUG") == "ERROR"
        assert resolve_level(env_level="INFO") == "INFO"
        assert resolve_level() == "WARNING"


class TestLevelNumber:
    def test_names(self):
        assert _level_number("debug") == logging.DEBUG
        assert _level_number("ERROR") == logging.ERROR

    def test_fallback(self):
        assert _level_number(None) == logging.WARNING
        assert _level_number("nonsense") == logging.WARNING
        assert _level_number("", default=logging.INFO) == logging.INFO


class TestConsoleFormat:
    def test_warnings_carry_level(self):
        assert _console_format(logging.WARNING).startswith("%(levelname)s: ")

    def test_verbose_prefixed_with_tool(self):
        assert _console_format(logging.INFO) == "mglgen: %(message)s"

    def test_debug_names_logger(self):
        assert "%(name)s" in _console_format(logging.DEBUG)


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "mglgen.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("mglgen.test").debug("derived util.go")
        for h in root.handlers:
            h.flush()
        assert "derived util.go" in log_file.read_text()

    def test_repeat_calls_replace_handlers(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(logging.getLogger().handlers) == 1

    def test_file_level_defaults_to_console(self, tmp_path: Path):
        setup_logging("INFO", log_file=str(tmp_path / "mglgen.log"))
        assert [h.level for h in logging.getLogger().handlers] == [logging.INFO, logging.INFO]
