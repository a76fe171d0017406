from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from .view_utils import center_over_parent, safe_call


class SettingsDialog(tk.Toplevel):
    """Modal dialog to edit app settings (UI-only)."""

    OnVoid = Optional[Callable[[], None]]
    OnSave = Optional[Callable[[dict], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_browse_export_dir: OnVoid = None,
        on_save: OnSave = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__(parent)
        self.title("Settings")
        self.transient(parent)
        self.resizable(False, False)

        self._on_browse_export_dir = on_browse_export_dir
        self._on_save = on_save
        self._on_close = on_close

        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)

        self.export_dir_var = tk.StringVar(value=".")
        self.currency_var = tk.StringVar(value="€")
        self.statistics_months_var = tk.StringVar(value="12")
        self.debug_logging_var = tk.BooleanVar(value=False)

        self._build_ui()

        self.geometry(center_over_parent(self, parent))
        self.grab_set()
        self.focus_set()

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        pad = dict(padx=8, pady=6)

        storage = ttk.Labelframe(self, text="Export")
        storage.grid(row=0, column=0, sticky="ew", **pad)
        storage.columnconfigure(1, weight=1)
        ttk.Label(storage, text="Export directory").grid(row=0, column=0, sticky="w")
        ttk.Entry(storage, textvariable=self.export_dir_var, width=40).grid(
            row=0, column=1, sticky="ew", padx=(0, 8)
        )
        ttk.Button(
            storage,
            text="Choose Export Dir…",
            command=lambda: safe_call(self._on_browse_export_dir),
        ).grid(row=0, column=2, sticky="w")

        display = ttk.Labelframe(self, text="Display")
        display.grid(row=1, column=0, sticky="ew", **pad)
        ttk.Label(display, text="Currency symbol").grid(row=0, column=0, sticky="w")
        ttk.Entry(display, textvariable=self.currency_var, width=6).grid(row=0, column=1, sticky="w", padx=(0, 8))
        ttk.Label(display, text="Statistics months (0 = all)").grid(row=0, column=2, sticky="w", padx=(12, 0))
        ttk.Spinbox(display, from_=0, to=120, textvariable=self.statistics_months_var, width=6).grid(
            row=0, column=3, sticky="w"
        )

        flags = ttk.Frame(self)
        flags.grid(row=2, column=0, sticky="ew", **pad)
        ttk.Checkbutton(flags, text="Enable debug logging", variable=self.debug_logging_var).pack(side="left")

        footer = ttk.Frame(self)
        footer.grid(row=3, column=0, sticky="ew", **pad)
        self._btn_save = ttk.Button(footer, text="Save", style="Primary.TButton", command=self._emit_save)
        self._btn_save.pack(side="right", padx=(0, 6))
        ttk.Button(footer, text="Close", command=self._on_close_clicked).pack(side="right")

    # ------------------------------------------------------------------
    def _emit_save(self) -> None:
        settings = {
            "export_dir": self.export_dir_var.get().strip() or ".",
            "currency_symbol": self.currency_var.get().strip(),
            "statistics_months": self._parse_int(self.statistics_months_var.get(), 12),
            "debug_logging": bool(self.debug_logging_var.get()),
        }
        safe_call(self._on_save, settings)

    def _on_close_clicked(self) -> None:
        safe_call(self._on_close)
        try:
            if self.winfo_exists():
                self.destroy()
        except tk.TclError:
            pass

    # ------------------------------------------------------------------
    # Public setters to initialize dialog fields from VM
    # ------------------------------------------------------------------
    def set_export_dir(self, path: str) -> None:
        self.export_dir_var.set(path)

    def set_currency_symbol(self, symbol: str) -> None:
        self.currency_var.set(symbol)

    def set_statistics_months(self, months: int) -> None:
        self.statistics_months_var.set(str(months))

    def set_debug_logging(self, enabled: bool) -> None:
        self.debug_logging_var.set(bool(enabled))

    # ------------------------------------------------------------------
    @staticmethod
    def _parse_int(text: str, default: int) -> int:
        try:
            return int(text)
        except (TypeError, ValueError):
            return default
