from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from ...domain.entities import Periodicite
from ...domain.ports import UseCaseError
from ...viewmodels.budgets_vm import BudgetEditVM
from .view_utils import center_over_parent


class BudgetDialog(tk.Toplevel):
    """Modal add/edit form for one budget line (UI-only)."""

    def __init__(self, parent: tk.Widget, *, vm: BudgetEditVM, currency_symbol: str = "€") -> None:
        super().__init__(parent)
        self.vm = vm
        self.currency_symbol = currency_symbol
        self.title(vm.title)
        self.transient(parent)
        self.resizable(False, False)
        self.protocol("WM_DELETE_WINDOW", self.destroy)

        self.description_var = tk.StringVar(value=vm.description)
        self.amount_var = tk.StringVar(value=vm.amount_text)
        self.periodicite_var = tk.StringVar(value=vm.periodicite.value)
        self.complement_var = tk.StringVar(value=vm.complement)
        self.error_var = tk.StringVar(value="")

        self._build_ui()
        for var in (self.description_var, self.amount_var, self.complement_var):
            var.trace_add("write", lambda *_: self._sync_to_vm())
        self._sync_to_vm()

        self.geometry(center_over_parent(self, parent))
        self.grab_set()
        self.focus_set()

    def _build_ui(self) -> None:
        pad = dict(padx=8, pady=6)

        description = ttk.Labelframe(self, text="Description")
        description.grid(row=0, column=0, sticky="ew", **pad)
        ttk.Entry(description, textvariable=self.description_var, width=36).pack(fill=tk.X, padx=6, pady=6)

        amount = ttk.Labelframe(self, text="Montant")
        amount.grid(row=1, column=0, sticky="ew", **pad)
        ttk.Entry(amount, textvariable=self.amount_var, width=14, justify="right").pack(
            side=tk.LEFT, padx=6, pady=6
        )
        ttk.Label(amount, text=self.currency_symbol).pack(side=tk.LEFT)

        periodicite = ttk.Labelframe(self, text="Périodicité")
        periodicite.grid(row=2, column=0, sticky="ew", **pad)
        for value in Periodicite:
            ttk.Radiobutton(
                periodicite,
                text=value.value,
                value=value.value,
                variable=self.periodicite_var,
                command=lambda: self.vm.set_periodicite(self.periodicite_var.get()),
            ).pack(side=tk.LEFT, padx=6, pady=6)

        complement = ttk.Labelframe(self, text="Complément périodicité (optionnel)")
        complement.grid(row=3, column=0, sticky="ew", **pad)
        ttk.Entry(complement, textvariable=self.complement_var, width=36).pack(fill=tk.X, padx=6, pady=6)

        ttk.Label(self, textvariable=self.error_var, style="Error.TLabel").grid(
            row=4, column=0, sticky="w", padx=8
        )

        buttons = ttk.Frame(self)
        buttons.grid(row=5, column=0, sticky="e", **pad)
        ttk.Button(buttons, text="Annuler", command=self.destroy).pack(side=tk.RIGHT)
        self.btn_save = ttk.Button(buttons, text="Sauvegarder", style="Primary.TButton", command=self._on_save)
        self.btn_save.pack(side=tk.RIGHT, padx=(0, 6))

        self.bind("<Escape>", lambda _e: self.destroy())


    def _sync_to_vm(self) -> None:
        self.vm.description = self.description_var.get()
        self.vm.amount_text = self.amount_var.get()
        self.vm.complement = self.complement_var.get()
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
