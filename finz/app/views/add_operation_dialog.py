"""Quick entry sheet for a single income or expense.

All state lives in ``AddOperationVM``; this dialog only mirrors it into Tk
variables and forwards edits back.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from ...domain.entities import OperationKind
from ...viewmodels.operation_vm import AddOperationVM
from .view_utils import center_over_parent, safe_call


class AddOperationDialog(tk.Toplevel):
    def __init__(self, parent: tk.Widget, *, vm: AddOperationVM, currency_symbol: str = "€") -> None:
        super().__init__(parent)
        self.vm = vm
        self.currency_symbol = currency_symbol
        self.title(vm.title)
        self.transient(parent)
        self.resizable(False, False)
        self.protocol("WM_DELETE_WINDOW", self._on_cancel)

        self.kind_var = tk.StringVar(value=vm.kind.value)
        self.amount_var = tk.StringVar(value=vm.amount_text)
        self.month_var = tk.StringVar(value=str(vm.month))
        self.day_var = tk.StringVar(value=str(vm.day))
        self.category_var = tk.StringVar(value=vm.category)
        self.description_var = tk.StringVar(value=vm.description)
        self.error_var = tk.StringVar(value="")

        self._build_ui()

        self.geometry(center_over_parent(self, parent))
        self.grab_set()
        self.amount_entry.focus_set()

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        pad = dict(padx=10, pady=6)

        ttk.Label(self, text=self.vm.title, style="Title.TLabel").grid(row=0, column=0, sticky="w", **pad)

        kinds = ttk.Frame(self)
        kinds.grid(row=1, column=0, sticky="w", **pad)
        for kind, style in ((OperationKind.INCOME, "Income.TRadiobutton"), (OperationKind.EXPENSE, "Expense.TRadiobutton")):
            ttk.Radiobutton(
                kinds,
                text=kind.display_name,
                value=kind.value,
                variable=self.kind_var,
                style=style,
                command=self._on_kind_changed,
            ).pack(side=tk.LEFT, padx=(0, 12))

        amount = ttk.Frame(self)
        amount.grid(row=2, column=0, sticky="w", **pad)
        self.amount_entry = ttk.Entry(amount, textvariable=self.amount_var, width=14, justify="right")
        self.amount_entry.pack(side=tk.LEFT)
        ttk.Label(amount, text=self.currency_symbol).pack(side=tk.LEFT, padx=(4, 0))

        when = ttk.Frame(self)
        when.grid(row=3, column=0, sticky="w", **pad)
        ttk.Label(when, text="Mois").pack(side=tk.LEFT)
        month_box = ttk.Combobox(
            when,
            textvariable=self.month_var,
            values=[str(m) for m in range(1, 13)],
            width=4,
            state="readonly",
        )
        month_box.pack(side=tk.LEFT, padx=(4, 12))
        month_box.bind("<<ComboboxSelected>>", lambda _e: self._on_month_changed())
        ttk.Label(when, text="Jour").pack(side=tk.LEFT)
        self.day_spin = ttk.Spinbox(
            when,
            from_=1,
            to=self.vm.max_day,
            textvariable=self.day_var,
            width=4,
            command=self._on_day_changed,
        )
        self.day_spin.pack(side=tk.LEFT, padx=(4, 12))
        ttk.Label(when, text=str(self.vm.year), style="Subtle.TLabel").pack(side=tk.LEFT)

        category = ttk.Frame(self)
        category.grid(row=4, column=0, sticky="ew", **pad)
        ttk.Label(category, text="Catégorie").pack(side=tk.LEFT)
        self.category_box = ttk.Combobox(
            category,
            textvariable=self.category_var,
            values=list(self.vm.current_categories),
            width=24,
            state="readonly",
        )
        self.category_box.pack(side=tk.LEFT, padx=(4, 0))

        description = ttk.Frame(self)
        description.grid(row=5, column=0, sticky="ew", **pad)
        ttk.Label(description, text="Description (optionnel)").pack(side=tk.LEFT)
        ttk.Entry(description, textvariable=self.description_var, width=28).pack(side=tk.LEFT, padx=(4, 0))

        ttk.Label(self, textvariable=self.error_var, style="Error.TLabel").grid(row=6, column=0, sticky="w", padx=10)

        footer = ttk.Frame(self)
        footer.grid(row=7, column=0, sticky="e", **pad)
        ttk.Button(footer, text="Enregistrer", style="Primary.TButton", command=self._on_save).pack(side=tk.RIGHT)
        ttk.Button(footer, text="Annuler", command=self._on_cancel).pack(side=tk.RIGHT, padx=(0, 6))

        self.bind("<Return>", lambda _e: self._on_save())
        self.bind("<Escape>", lambda _e: self._on_cancel())

    # ------------------------------------------------------------------
    def _on_kind_changed(self) -> None:
        self.vm.set_kind(self.kind_var.get())
        self.category_box.configure(values=list(self.vm.current_categories))
        self.category_var.set(self.vm.category)

    def _on_month_changed(self) -> None:
        self.vm.set_month(int(self.month_var.get()))
        self.day_spin.configure(to=self.vm.max_day)
        self.day_var.set(str(self.vm.day))

    def _on_day_changed(self) -> None:
        try:
            self.vm.set_day(int(self.day_var.get()))
        except ValueError:
            pass
        self.day_var.set(str(self.vm.day))

    def _on_save(self) -> None:
        self._on_day_changed()
        self.vm.amount_text = self.amount_var.get()
        self.vm.category = self.category_var.get()
        self.vm.description = self.description_var.get()
        if self.vm.cmd_save():
            self.destroy()
        else:
            self.error_var.set(self.vm.error or "")

    def _on_cancel(self) -> None:
        safe_call(self.vm.cmd_cancel)
        self.destroy()
