from __future__ import annotations

import pytest

from finz.adapters.persistence_sqlite import PersistenceController

_FINZ_ENV_VARS = (
    "FINZ_STORAGE_ROOT",
    "FINZ_DB_PATH",
    "FINZ_LOG_LEVEL",
    "FINZ_GUI_LOG_LEVEL",
    "FINZ_DEBUG_LOGGING",
    "FINZ_DEBUG",
    "FINZ_LOG_FILE",
)


@pytest.fixture(autouse=True)
def _isolated_finz_env(monkeypatch, tmp_path):
    for name in _FINZ_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FINZ_STORAGE_ROOT", str(tmp_path))
    PersistenceController.reset_shared()
    yield
    PersistenceController.reset_shared()


@pytest.fixture
def store():
    """Empty in-memory store."""
    controller = PersistenceController(in_memory=True, seed=False)
    yield controller
    controller.close()


@pytest.fixture
def seeded_store():
    controller = PersistenceController(in_memory=True)
    yield controller
    controller.close()
