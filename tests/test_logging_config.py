"""Tests for logging setup."""

import sys
import os
import logging
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from config.logging_config import setup_logging, ColorFormatter


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def file_handlers(root):
    return [h for h in root.handlers if isinstance(h, logging.FileHandler)]


class TestSetupLogging:
    def test_console_and_file(self, restore_root, tmp_path):
        setup_logging("DEBUG", tmp_path / "logs" / "app.log")
        assert restore_root.level == logging.DEBUG
        assert len(restore_root.handlers) == 2
        assert (tmp_path / "logs" / "app.log").exists()

    def test_rerun_closes_previous_file_handler(self, restore_root, tmp_path):
        setup_logging("INFO", tmp_path / "app.log")
        first = file_handlers(restore_root)[0]
        setup_logging("INFO", tmp_path / "app.log")
        assert first.stream is None
        assert first not in restore_root.handlers
        assert len(file_handlers(restore_root)) == 1

    def test_unknown_level_falls_back_to_info(self, restore_root):
        setup_logging("chatty")
        assert restore_root.level == logging.INFO


class TestColorFormatter:
    def test_original_record_untouched(self):
        record = logging.LogRecord("engine", logging.WARNING, __file__, 1, "msg", None, None)
        text = ColorFormatter("%(levelname)s %(message)s").format(record)
        assert "WARNING" in text
        assert record.levelname == "WARNING"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
