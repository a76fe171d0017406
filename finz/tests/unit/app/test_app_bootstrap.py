from __future__ import annotations

import json
from typing import List

import pytest

import finz.app.main as app_main
from finz.adapters.persistence_sqlite import PersistenceController, PersistenceError
from finz.adapters.storage_local import StorageLocal
from finz.app.main import App
from finz.domain.ports import UseCaseError


class WinStub:
    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.content_host = object()
        self.mounted: List[object] = []
        self.toasts: List[str] = []
        self.status: List[str] = []
        self.mainloop_calls = 0
        self.destroyed = False

    def mount_root_view(self, view) -> None:
        self.mounted.append(view)

    def set_status_message(self, text: str) -> None:
        self.status.append(text)

    def show_toast(self, message: str, level: str = "info") -> None:
        self.toasts.append(message)

    def mainloop(self) -> None:
        self.mainloop_calls += 1

    def geometry(self) -> str:
        return "900x600+20+30"

    def destroy(self) -> None:
        self.destroyed = True


class RootViewStub:
    created: List["RootViewStub"] = []

    def __init__(self, parent, *, environment) -> None:
        self.parent = parent
        self.environment = environment
        RootViewStub.created.append(self)


@pytest.fixture(autouse=True)
def _reset_created():
    RootViewStub.created = []
    yield
    RootViewStub.created = []


@pytest.fixture
def storage(tmp_path):
    return StorageLocal(root_dir=str(tmp_path))


def _make_app(persistence=None, storage=None) -> App:
    return App(
        persistence,
        storage=storage,
        window_factory=WinStub,
        root_view_factory=RootViewStub,
    )


def test_start_builds_exactly_one_root_view(seeded_store, storage):
    app = _make_app(seeded_store, storage)

    app.start(run_loop=False)

    assert len(RootViewStub.created) == 1
    assert app.root_view is RootViewStub.created[0]
    assert app.window.mounted == [app.root_view]
    assert app.root_view.parent is app.window.content_host
    assert app.window.status == ["Ready."]
    assert app.window.mainloop_calls == 0


def test_root_view_receives_the_persistence_view_context(seeded_store, storage):
    app = _make_app(seeded_store, storage)

    app.start(run_loop=False)

    assert app.persistence is seeded_store
    assert app.root_view.environment is app.environment
    assert app.root_view.environment.data_context is seeded_store.container.view_context
    assert app.environment.settings is app.settings_vm


def test_start_runs_the_event_loop(seeded_store, storage):
    app = _make_app(seeded_store, storage)

    app.start()

    assert app.window.mainloop_calls == 1


def test_second_start_raises_and_builds_nothing(seeded_store, storage):
    app = _make_app(seeded_store, storage)
    app.start(run_loop=False)

    with pytest.raises(RuntimeError):
        app.start(run_loop=False)

    assert len(RootViewStub.created) == 1


def test_shared_controller_is_used_when_nothing_is_injected(tmp_path, monkeypatch, storage):
    monkeypatch.setenv("FINZ_DB_PATH", str(tmp_path / "app.sqlite3"))
    app = _make_app(storage=storage)

    app.start(run_loop=False)

    shared = PersistenceController.shared()
    assert app.persistence is shared
    assert app.root_view.environment.data_context is shared.view_context
    assert shared.view_context.count("category") == 3


def test_persistence_failure_propagates_from_start(tmp_path, monkeypatch, storage):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setenv("FINZ_DB_PATH", str(blocker / "finz.sqlite3"))
    app = _make_app(storage=storage)

    with pytest.raises(PersistenceError):
        app.start(run_loop=False)

    assert RootViewStub.created == []


def test_main_exits_with_status_one_on_persistence_failure(monkeypatch):
    class FailingApp:
        def start(self) -> None:
            raise PersistenceError("cannot open")

    monkeypatch.setattr(app_main, "App", FailingApp)

    with pytest.raises(SystemExit) as info:
        app_main.main()

    assert info.value.code == 1


def test_bootstrap_exposes_no_entity_mutation():
    for name in ("save_category", "delete_category", "save_budget", "insert_operation", "save"):
        assert not hasattr(App, name)


def test_stored_settings_are_applied_to_the_window(seeded_store, tmp_path, storage):
    (tmp_path / "user_settings.json").write_text(
        json.dumps({"currency_symbol": "$", "window_geometry": "1300x900"}),
        encoding="utf-8",
    )
    app = _make_app(seeded_store, storage)

    app.start(run_loop=False)

    assert app.settings_vm.currency_symbol == "$"
    assert app.window.kwargs["geometry"] == "1300x900"
    assert app.window.kwargs["title"] == "FINZ"


def test_invalid_stored_settings_fall_back_to_defaults(seeded_store, tmp_path, storage):
    (tmp_path / "user_settings.json").write_text(json.dumps({"bogus": 1}), encoding="utf-8")

    app = _make_app(seeded_store, storage)

    assert app.settings_vm.currency_symbol == "€"


def test_export_writes_csv_and_toasts(seeded_store, tmp_path, storage):
    app = _make_app(seeded_store, storage)
    app.start(run_loop=False)
    target = tmp_path / "out" / "ops.csv"
    app._ask_export_path = lambda: str(target)

    app._on_export()

    assert target.exists()
    assert app.window.toasts == [f"Exported to {target}"]


def test_export_cancelled_does_nothing(seeded_store, storage):
    app = _make_app(seeded_store, storage)
    app.start(run_loop=False)
    app._ask_export_path = lambda: None

    app._on_export()

    assert app.window.toasts == []


def test_export_failure_is_shown_as_toast(seeded_store, storage, monkeypatch):
    app = _make_app(seeded_store, storage)
    app.start(run_loop=False)
    app._ask_export_path = lambda: "ignored.csv"

    class FailingExport:
        def __init__(self, context) -> None:
            pass

        def __call__(self, target):
            raise UseCaseError("EXPORT_FAILED", "Database error: locked")

    monkeypatch.setattr(app_main, "ExportOperations", FailingExport)

    app._on_export()

    assert app.window.toasts == ["Export: Database error: locked"]


def test_close_persists_geometry_and_releases_store(tmp_path, storage):
    persistence = PersistenceController(in_memory=True)
    app = _make_app(persistence, storage)
    app.start(run_loop=False)

    app._on_close()

    assert app.window.destroyed is True
    assert storage.load_user_settings()["window_geometry"] == "900x600+20+30"
    with pytest.raises(PersistenceError):
        persistence.view_context


def test_settings_dialog_save_persists_and_toasts(seeded_store, tmp_path, storage):
    app = _make_app(seeded_store, storage)
    app.start(run_loop=False)

    app._on_settings_dialog_saved(
        {"export_dir": str(tmp_path), "currency_symbol": "CHF", "statistics_months": 6, "debug_logging": False}
    )

    assert app.window.toasts == ["Settings saved."]
    assert app.environment.settings.currency_symbol == "CHF"
    assert storage.load_user_settings()["statistics_months"] == 6


def test_settings_dialog_rejects_missing_export_dir(seeded_store, tmp_path, storage):
    app = _make_app(seeded_store, storage)
    app.start(run_loop=False)

    app._on_settings_dialog_saved({"export_dir": str(tmp_path / "missing")})

    assert app.window.toasts[-1].startswith("Export directory does not exist")
    assert storage.load_user_settings() is None


def test_add_operation_dialog_saves_and_toasts(seeded_store, storage, monkeypatch):
    dialogs = []

    class DialogStub:
        def __init__(self, parent, *, vm, currency_symbol) -> None:
            self.vm = vm
            self.currency_symbol = currency_symbol
            dialogs.append(self)

    monkeypatch.setattr(app_main, "AddOperationDialog", DialogStub)
    app = _make_app(seeded_store, storage)
    app.start(run_loop=False)

    app._on_add_operation()
    (dialog,) = dialogs
    assert dialog.currency_symbol == app.settings_vm.currency_symbol
    dialog.vm.amount_text = "120,50"

    assert dialog.vm.cmd_save() is True
    assert app.window.toasts == ["Opération enregistrée : Salaire"]
    assert seeded_store.view_context.count("operation") == 1


def test_statistics_failure_is_shown_as_toast(seeded_store, storage, monkeypatch):
    class FailingStatistics:
        def __init__(self, parent, *, environment) -> None:
            raise UseCaseError("STATISTICS_FAILED", "Database error: locked")

    monkeypatch.setattr(app_main, "StatisticsWindow", FailingStatistics)
    app = _make_app(seeded_store, storage)
    app.start(run_loop=False)

    app._on_open_statistics()

    assert app.window.toasts == ["Statistiques: Database error: locked"]
