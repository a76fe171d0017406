# finz/app/main.py
from __future__ import annotations
import logging
import os
from tkinter import filedialog
from typing import Any, Callable, Dict, Optional

# ---- Views (UI-only) ----
from .views.main_window import MainWindowView
from .views.categories_view import CategoriesView
from .views.add_operation_dialog import AddOperationDialog
from .views.statistics_window import StatisticsWindow
from .views.settings_dialog import SettingsDialog
from .environment import Environment

# ---- ViewModels ----
from ..viewmodels.operation_vm import AddOperationVM
from ..viewmodels.settings_vm import SettingsVM

# ---- UseCases & Adapters ----
from ..usecases.export_operations import ExportOperations
from ..adapters.persistence_sqlite import PersistenceController, PersistenceError
from ..adapters.storage_local import StorageLocal
from ..domain.entities import Operation
from ..domain.ports import StoragePort, UseCaseError
from ..utils import logging as logging_utils
from ..utils.storage_paths import export_filename, storage_root


class App:
    """Application bootstrap: one persistence handle, one window, one root view.

    ``start()`` wires the shared persistence handle's view context into the
    root view through an explicit ``Environment`` and then runs the Tk loop.
    The factories exist so tests can replace Tk widgets with stubs.
    """

    def __init__(
        self,
        persistence: Optional[PersistenceController] = None,
        *,
        storage: Optional[StoragePort] = None,
        window_factory: Callable[..., Any] = MainWindowView,
        root_view_factory: Callable[..., Any] = CategoriesView,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self._persistence = persistence
        self._storage: StoragePort = storage or StorageLocal(str(storage_root()))
        self._window_factory = window_factory
        self._root_view_factory = root_view_factory

        self.settings_vm = SettingsVM(on_save=self._on_settings_saved)
        self._environment: Optional[Environment] = None
        self._window: Any = None
        self._root_view: Any = None
        self._started = False

        self._load_user_settings()

    # ------------------------------------------------------------------
    # Read-only handles
    # ------------------------------------------------------------------
    @property
    def persistence(self) -> Optional[PersistenceController]:
        return self._persistence

    @property
    def environment(self) -> Optional[Environment]:
        return self._environment

    @property
    def window(self) -> Any:
        return self._window

    @property
    def root_view(self) -> Any:
        return self._root_view

    # ------------------------------------------------------------------
    def start(self, run_loop: bool = True) -> None:
        """Build the scene once and (optionally) enter the Tk event loop.

        Raises:
            RuntimeError: When called a second time.
            PersistenceError: When the store cannot be opened.
        """
        if self._started:
            raise RuntimeError("App.start() may only be called once")
        self._started = True

        if self._persistence is None:
            self._persistence = PersistenceController.shared()
        self._environment = Environment(
            data_context=self._persistence.view_context,
            settings=self.settings_vm,
        )

        self._window = self._window_factory(
            title="FINZ",
            geometry=self.settings_vm.window_geometry,
            on_add_operation=self._on_add_operation,
            on_open_statistics=self._on_open_statistics,
            on_export=self._on_export,
            on_open_settings=self._on_open_settings,
            on_close=self._on_close,
        )
        self._root_view = self._root_view_factory(self._window.content_host, environment=self._environment)
        self._window.mount_root_view(self._root_view)
        self._window.set_status_message("Ready.")
        self._log.info("FINZ started with store %s", self._persistence.container.store_location)

        if run_loop:
            self._window.mainloop()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def _load_user_settings(self) -> None:
        payload: Optional[Dict] = None
        try:
            payload = self._storage.load_user_settings()
        except Exception as exc:
            self._log.warning("Could not load settings: %s", exc)
        if payload is not None:
            try:
                self.settings_vm.apply_dict(payload)
            except ValueError as exc:
                self._log.warning("Ignoring stored settings: %s", exc)
        self._apply_logging_preferences()

    def _apply_logging_preferences(self) -> None:
        level = logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Effective GUI log level: %s", logging_utils.level_name(level))

    def _on_open_settings(self) -> None:
        dlg: Optional[SettingsDialog] = None

        def handle_browse_export_dir() -> None:
            if not dlg:
                return
            current = dlg.export_dir_var.get().strip() or self.settings_vm.export_dir
            initial_dir = current if os.path.isdir(current) else os.path.expanduser("~")
            selected = filedialog.askdirectory(
                parent=dlg,
                initialdir=initial_dir or None,
                title="Select Export Directory",
            )
            if not selected:
                return
            dlg.set_export_dir(os.path.normpath(selected))

        dlg = SettingsDialog(
            self._window,
            on_browse_export_dir=handle_browse_export_dir,
            on_save=self._on_settings_dialog_saved,
            on_close=lambda: None,
        )
        dlg.set_export_dir(self.settings_vm.export_dir)
        dlg.set_currency_symbol(self.settings_vm.currency_symbol)
        dlg.set_statistics_months(self.settings_vm.statistics_months)
        dlg.set_debug_logging(self.settings_vm.debug_logging)

    def _on_settings_dialog_saved(self, cfg: dict) -> None:
        payload = dict(cfg or {})
        raw_dir = str(payload.get("export_dir") or ".").strip() or "."
        if not os.path.isdir(os.path.expanduser(raw_dir)):
            self._window.show_toast(f"Export directory does not exist: {raw_dir}")
            return
        try:
            self.settings_vm.apply_dict(payload)
            self.settings_vm.cmd_save()
        except (ValueError, OSError) as exc:
            self._window.show_toast(f"Could not save settings: {exc}")
            return
        self._window.show_toast("Settings saved.")

    def _on_settings_saved(self, snapshot: dict) -> None:
        self._storage.save_user_settings(snapshot)
        self._apply_logging_preferences()

    # ------------------------------------------------------------------
    # Toolbar workflows
    # ------------------------------------------------------------------
    def _on_add_operation(self) -> None:
        vm = AddOperationVM(self._environment.data_context, on_saved=self._on_operation_saved)
        AddOperationDialog(self._window, vm=vm, currency_symbol=self.settings_vm.currency_symbol)

    def _on_operation_saved(self, operation: Operation) -> None:
        self._window.show_toast(f"Opération enregistrée : {operation.title}")

    def _on_open_statistics(self) -> None:
        try:
            StatisticsWindow(self._window, environment=self._environment)
        except UseCaseError as exc:
            self._toast_error(exc, context="Statistiques")

    def _on_export(self) -> None:
        target = self._ask_export_path()
        if not target:
            return
        try:
            written = ExportOperations(self._environment.data_context)(target)
        except UseCaseError as exc:
            self._toast_error(exc, context="Export")
            return
        self._window.show_toast(f"Exported to {written}")

    def _ask_export_path(self) -> Optional[str]:
        export_dir = self.settings_vm.export_dir
        selected = filedialog.asksaveasfilename(
            parent=self._window,
            title="Export operations",
            initialdir=export_dir if os.path.isdir(export_dir) else None,
            initialfile=export_filename(),
            defaultextension=".csv",
            filetypes=[("CSV", "*.csv")],
        )
        return selected or None

    def _on_close(self) -> None:
        try:
            self.settings_vm.window_geometry = self._window.geometry()
            self._storage.save_user_settings(self.settings_vm.to_dict())
        except Exception:
            self._log.exception("Could not persist settings on close")
        self._window.destroy()
        if self._persistence is not None:
            self._persistence.close()

    # ------------------------------------------------------------------
    def _toast_error(self, err: Exception, *, context: Optional[str] = None) -> None:
        if isinstance(err, UseCaseError):
            self._log.warning("UseCase error (%s): %s", err.code, err.message)
            message = err.message
        else:
            self._log.exception("Unexpected error: %s", err)
            message = str(err)
        if context:
            message = f"{context}: {message}"
        self._window.show_toast(message)


def main() -> None:
    logging_utils.configure_root()
    try:
        App().start()
    except PersistenceError:
        logging.getLogger(__name__).exception("Unable to open the FINZ data store")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
