"""
MainWindowView
---------------
Tkinter main window for FINZ following MVVM + Hexagonal architecture.
This file contains **only View code**: no SQL, no domain logic. It exposes
callback hooks that are connected by the application bootstrap.

The window provides:
  * Toolbar with the global actions (new operation, statistics, export, settings)
  * Content host where the root view (CategoriesView) is mounted
  * StatusBar at the bottom
"""
from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from .theme import apply_modern_theme


class MainWindowView(tk.Tk):
    """Top-level application window (the single scene of the app)."""

    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        *,
        title: str = "FINZ",
        geometry: str = "1100x720",
        on_add_operation: OnVoid = None,
        on_open_statistics: OnVoid = None,
        on_export: OnVoid = None,
        on_open_settings: OnVoid = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__()
        apply_modern_theme(self)

        self.title(title)
        self.geometry(geometry)
        self.minsize(800, 560)

        self._on_add_operation = on_add_operation
        self._on_open_statistics = on_open_statistics
        self._on_export = on_export
        self._on_open_settings = on_open_settings
        self._on_close = on_close
        self.protocol("WM_DELETE_WINDOW", self._handle_close)

        # ---- High-level layout: 3 rows (Toolbar, Content, Status) ----
        self.rowconfigure(1, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_toolbar(self)
        self._build_content_host(self)
        self._build_statusbar(self)

        self.bind("<Control-n>", lambda e: self._on_add_operation and self._on_add_operation())
        self.bind("<Control-e>", lambda e: self._on_export and self._on_export())

    # ------------------------------------------------------------------
    # Toolbar
    # ------------------------------------------------------------------
    def _build_toolbar(self, parent: tk.Widget) -> None:
        toolbar = ttk.Frame(parent)
        toolbar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 4))

        ttk.Button(
            toolbar, text="Nouvelle opération", style="Primary.TButton", command=self._on_add_operation
        ).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(toolbar, text="Statistiques", command=self._on_open_statistics).grid(
            row=0, column=1, padx=6
        )
        ttk.Button(toolbar, text="Export CSV", command=self._on_export).grid(
            row=0, column=2, padx=(24, 6)
        )
        ttk.Button(toolbar, text="Settings", command=self._on_open_settings).grid(
            row=0, column=3, padx=6
        )

    # ------------------------------------------------------------------
    # Content host
    # ------------------------------------------------------------------
    def _build_content_host(self, parent: tk.Widget) -> None:
        self.content_host = ttk.Frame(parent)
        self.content_host.grid(row=1, column=0, sticky="nsew", padx=8, pady=4)
        self.content_host.rowconfigure(0, weight=1)
        self.content_host.columnconfigure(0, weight=1)

    # ------------------------------------------------------------------
    # StatusBar
    # ------------------------------------------------------------------
    def _build_statusbar(self, parent: tk.Widget) -> None:
        status = ttk.Frame(parent)
        status.grid(row=2, column=0, sticky="ew", padx=8, pady=(4, 8))
        status.columnconfigure(0, weight=1)

        self.status_message_var = tk.StringVar(value="Ready.")
        ttk.Label(status, textvariable=self.status_message_var, style="Subtle.TLabel").grid(
            row=0, column=0, sticky="w"
        )

    # ------------------------------------------------------------------
    # Public API (called by the bootstrap)
    # ------------------------------------------------------------------
    def mount_root_view(self, view: tk.Widget) -> None:
        """Place the root view in the content host."""
        view.grid(row=0, column=0, sticky="nsew")

    def set_status_message(self, text: str) -> None:
        """Update the short status message shown in the status bar."""
        self.status_message_var.set(text)

    def show_toast(self, message: str, level: str = "info") -> None:
        """
        Lightweight user feedback in the statusbar.
        level is currently informational; styling could be extended later.
        """
        self.status_message_var.set(message)

    def _handle_close(self) -> None:
        if self._on_close:
            self._on_close()
        else:
            self.destroy()
