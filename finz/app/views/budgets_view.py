"""Budgets panel for one category.

Rows come from ``BudgetsVM``; add/edit open ``BudgetDialog`` and delete
removes every selected row at once.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import List, Optional

from ...domain.entities import Category
from ...domain.ports import UseCaseError
from ...viewmodels.budgets_vm import BudgetsVM
from ..environment import Environment
from .budget_dialog import BudgetDialog

log = logging.getLogger(__name__)


class BudgetsView(ttk.Frame):
    def __init__(self, parent: tk.Widget, *, environment: Environment, **kwargs) -> None:
        super().__init__(parent, **kwargs)
        self.environment = environment
        self.vm = BudgetsVM(
            environment.data_context,
            currency_symbol=environment.settings.currency_symbol,
        )

        self.title_var = tk.StringVar(value=self.vm.title)
        ttk.Label(self, textvariable=self.title_var, style="Title.TLabel").pack(
            side=tk.TOP, anchor="w", padx=4, pady=(4, 8)
        )

        toolbar = ttk.Frame(self)
        toolbar.pack(side=tk.BOTTOM, fill=tk.X, padx=4, pady=4)
        self.btn_add = ttk.Button(toolbar, text="Add Budget", command=self._on_add_click, state="disabled")
        self.btn_add.pack(side=tk.LEFT)
        self.btn_delete = ttk.Button(toolbar, text="Delete", command=self._on_delete_click, state="disabled")
        self.btn_delete.pack(side=tk.LEFT, padx=6)

        columns = ("description", "amount", "periodicite", "complement")
        self.tree = ttk.Treeview(self, columns=columns, show="headings", selectmode="extended")
        for column, heading, width, anchor in (
            ("description", "Description", 220, tk.W),
            ("amount", "Montant", 110, tk.E),
            ("periodicite", "Périodicité", 120, tk.CENTER),
            ("complement", "Complément", 160, tk.W),
        ):
            self.tree.heading(column, text=heading)
            self.tree.column(column, width=width, anchor=anchor, stretch=column in {"description", "complement"})
        vsb = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(4, 0))
        vsb.pack(side=tk.RIGHT, fill=tk.Y)

        self.tree.bind("<<TreeviewSelect>>", lambda _e: self._update_buttons_state())
        self.tree.bind("<Double-1>", self._on_double_click)

        environment.data_context.add_listener(self.refresh)
        self.bind("<Destroy>", self._on_destroy, add="+")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def show_category(self, category: Optional[Category]) -> None:
        self.vm.set_category(category)
        self._render()

    def refresh(self) -> None:
        self.vm.refresh()
        self._render()

    def selected_ids(self) -> List[int]:
        return [int(iid) for iid in self.tree.selection()]

    # ------------------------------------------------------------------
    def _render(self) -> None:
        self.title_var.set(self.vm.title)
        self.tree.delete(*self.tree.get_children())
        for row in self.vm.rows():
            self.tree.insert(
                "",
                tk.END,
                iid=str(row.id),
                values=(row.description, row.amount, row.periodicite, row.complement),
            )
        self._update_buttons_state()

    def _on_add_click(self) -> None:
        if self.vm.category is None:
            return
        self._open_dialog(self.vm.edit_vm())

    def _on_double_click(self, event) -> None:
        iid = self.tree.identify_row(event.y)
        if not iid:
            return
        budget = self.vm.budget(int(iid))
        if budget is not None:
            self._open_dialog(self.vm.edit_vm(budget))

    def _open_dialog(self, vm) -> None:
        BudgetDialog(
            self.winfo_toplevel(),
            vm=vm,
            currency_symbol=self.environment.settings.currency_symbol,
        )

    def _on_delete_click(self) -> None:
        ids = self.selected_ids()
        if not ids:
            return
        try:
            self.vm.cmd_delete(ids)
        except UseCaseError as exc:
            log.error("Delete budgets failed: %s", exc.message)
            messagebox.showerror("Budgets", exc.message, parent=self)

    def _update_buttons_state(self) -> None:
        self.btn_add.configure(state="normal" if self.vm.category is not None else "disabled")
        self.btn_delete.configure(state="normal" if self.tree.selection() else "disabled")

    def _on_destroy(self, event) -> None:
        if event.widget is self:
            self.environment.data_context.remove_listener(self.refresh)
