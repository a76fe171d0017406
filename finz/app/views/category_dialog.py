from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from ...domain.entities import DebCred
from ...domain.ports import UseCaseError
from ...viewmodels.categories_vm import CategoryEditVM
from .view_utils import center_over_parent


class CategoryDialog(tk.Toplevel):
    """Modal add/edit form for one category (UI-only)."""

    def __init__(self, parent: tk.Widget, *, vm: CategoryEditVM) -> None:
        super().__init__(parent)
        self.vm = vm
        self.title(vm.title)
        self.transient(parent)
        self.resizable(False, False)
        self.protocol("WM_DELETE_WINDOW", self.destroy)

        self.name_var = tk.StringVar(value=vm.name)
        self.debcred_var = tk.StringVar(value=vm.debcred.value)
        self.error_var = tk.StringVar(value="")

        self._build_ui()
        self.name_var.trace_add("write", lambda *_: self._on_name_changed())
        self._on_name_changed()

        self.geometry(center_over_parent(self, parent))
        self.grab_set()
        self.name_entry.focus_set()

    def _build_ui(self) -> None:
        pad = dict(padx=8, pady=6)
        form = ttk.Frame(self)
        form.grid(row=0, column=0, sticky="nsew", **pad)
        form.columnconfigure(1, weight=1)

        ttk.Label(form, text="Categorie").grid(row=0, column=0, sticky="w")
        self.name_entry = ttk.Entry(form, textvariable=self.name_var, width=32)
        self.name_entry.grid(row=0, column=1, sticky="ew", padx=(8, 0))

        ttk.Label(form, text="DebCred").grid(row=1, column=0, sticky="w", pady=(8, 0))
        segmented = ttk.Frame(form)
        segmented.grid(row=1, column=1, sticky="w", padx=(8, 0), pady=(8, 0))
        for value in DebCred:
            ttk.Radiobutton(
                segmented,
                text=value.value,
                value=value.value,
                variable=self.debcred_var,
                command=lambda: self.vm.set_debcred(self.debcred_var.get()),
            ).pack(side=tk.LEFT, padx=(0, 8))

        ttk.Label(self, textvariable=self.error_var, style="Error.TLabel").grid(
            row=1, column=0, sticky="w", padx=8
        )

        buttons = ttk.Frame(self)
        buttons.grid(row=2, column=0, sticky="e", **pad)
        ttk.Button(buttons, text="Cancel", command=self.destroy).pack(side=tk.RIGHT)
        self.btn_save = ttk.Button(buttons, text="Save", style="Primary.TButton", command=self._on_save)
        self.btn_save.pack(side=tk.RIGHT, padx=(0, 6))

        self.bind("<Return>", lambda _e: self._on_save())
        self.bind("<Escape>", lambda _e: self.destroy())

    def _on_name_changed(self) -> None:
        self.vm.set_name(self.name_var.get())
        self.btn_save.configure(state="normal" if self.vm.can_save else "disabled")

    def _on_save(self) -> None:
        if not self.vm.can_save:
            return
        try:
            self.vm.cmd_save()
        except UseCaseError as exc:
            self.error_var.set(exc.message)
            return
        self.destroy()
