from __future__ import annotations

import logging

import pytest

from finz.utils import logging as logging_utils


@pytest.fixture(autouse=True)
def _restore_root_level():
    root = logging.getLogger()
    previous = root.level
    yield
    root.setLevel(previous)


def test_configure_root_uses_default_without_env():
    assert logging_utils.configure_root() == logging.INFO
    assert logging.getLogger().level == logging.INFO


def test_configure_root_honours_explicit_level(monkeypatch):
    monkeypatch.setenv("FINZ_LOG_LEVEL", "warning")

    assert logging_utils.configure_root() == logging.WARNING


def test_debug_flag_forces_debug(monkeypatch):
    monkeypatch.setenv("FINZ_DEBUG", "yes")

    assert logging_utils.env_requests_debug() is True
    assert logging_utils.configure_root() == logging.DEBUG


def test_gui_preference_toggles_debug():
    assert logging_utils.apply_gui_preferences(True) == logging.DEBUG
    assert logging_utils.apply_gui_preferences(False) == logging.INFO
    assert logging_utils.level_name(logging.DEBUG) == "DEBUG"


def test_env_level_wins_over_gui_preference(monkeypatch):
    monkeypatch.setenv("FINZ_GUI_LOG_LEVEL", "ERROR")

    assert logging_utils.apply_gui_preferences(True) == logging.ERROR
    assert logging_utils.env_requests_debug() is False


def test_log_file_handler_is_attached_once(monkeypatch, tmp_path):
    log_path = tmp_path / "finz.log"
    monkeypatch.setenv("FINZ_LOG_FILE", str(log_path))
    root = logging.getLogger()

    logging_utils.configure_root()
    logging_utils.configure_root()
    handlers = [
        h for h in root.handlers if isinstance(h, logging.FileHandler) and h.baseFilename == str(log_path)
    ]
    try:
        assert len(handlers) == 1
        logging.getLogger("finz.test").warning("hello file")
        handlers[0].flush()
        assert "hello file" in log_path.read_text(encoding="utf-8")
    finally:
        for handler in handlers:
            root.removeHandler(handler)
            handler.close()


def test_matplotlib_logger_is_quieted():
    logging_utils.configure_root("DEBUG")

    assert logging.getLogger("matplotlib").level == logging.WARNING


def test_explicit_notset_level_is_not_replaced_by_default(monkeypatch):
    monkeypatch.setenv("FINZ_LOG_LEVEL", "0")

    assert logging_utils.configure_root(logging.WARNING) == logging.NOTSET
    assert logging.getLogger().level == logging.NOTSET
