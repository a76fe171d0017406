"""Root view: category list with the budgets of the selected category.

The view is constructed once by the bootstrap with the application
``Environment``; it builds its own view model from
``environment.data_context`` and hands the same environment to the budgets
panel it composes.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Optional

from ...domain.entities import Category
from ...domain.ports import UseCaseError
from ...viewmodels.categories_vm import CategoriesVM
from ..environment import Environment
from .budgets_view import BudgetsView
from .category_dialog import CategoryDialog

log = logging.getLogger(__name__)


class CategoriesView(ttk.Frame):
    """Master/detail frame: categories on the left, budgets on the right."""

    def __init__(self, parent: tk.Widget, *, environment: Environment, **kwargs) -> None:
        super().__init__(parent, **kwargs)
        self.environment = environment
        self.vm = CategoriesVM(
            environment.data_context,
            on_selection_changed=self._on_selection_changed,
        )

        panes = ttk.PanedWindow(self, orient=tk.HORIZONTAL)
        panes.pack(fill=tk.BOTH, expand=True)

        left = ttk.Frame(panes)
        panes.add(left, weight=1)
        self._build_list(left)

        self.budgets = BudgetsView(panes, environment=environment)
        panes.add(self.budgets, weight=2)

        environment.data_context.add_listener(self.refresh)
        self.bind("<Destroy>", self._on_destroy, add="+")
        self.refresh()

    # ------------------------------------------------------------------
    def _build_list(self, parent: ttk.Frame) -> None:
        ttk.Label(parent, text=self.vm.title, style="Title.TLabel").pack(
            side=tk.TOP, anchor="w", padx=4, pady=(4, 8)
        )

        toolbar = ttk.Frame(parent)
        toolbar.pack(side=tk.BOTTOM, fill=tk.X, padx=4, pady=4)
        ttk.Button(toolbar, text="Add Category", command=self._on_add_click).pack(side=tk.LEFT)
        self.btn_edit = ttk.Button(toolbar, text="Edit", command=self._on_edit_click, state="disabled")
        self.btn_edit.pack(side=tk.LEFT, padx=6)
        self.btn_delete = ttk.Button(toolbar, text="Delete", command=self._on_delete_click, state="disabled")
        self.btn_delete.pack(side=tk.LEFT)

        self.tree = ttk.Treeview(
            parent,
            columns=("name", "debcred"),
            show="headings",
            selectmode="browse",
        )
        self.tree.heading("name", text="Categorie")
        self.tree.heading("debcred", text="DebCred")
        self.tree.column("name", width=200, anchor=tk.W, stretch=True)
        self.tree.column("debcred", width=80, anchor=tk.CENTER, stretch=False)
        vsb = ttk.Scrollbar(parent, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(4, 0))
        vsb.pack(side=tk.RIGHT, fill=tk.Y)

        self.tree.bind("<<TreeviewSelect>>", self._on_tree_select)
        self.tree.bind("<Double-1>", lambda _e: self._on_edit_click())
        self.tree.bind("<Delete>", lambda _e: self._on_delete_click())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Re-query categories and redraw the list, keeping the selection."""
        rows = self.vm.refresh()
        selected = self.vm.selected()
        self.tree.delete(*self.tree.get_children())
        for row in rows:
            self.tree.insert("", tk.END, iid=str(row.id), values=(row.name, row.debcred))
        if selected is not None and str(selected.id) in self.tree.get_children(""):
            self.tree.selection_set(str(selected.id))
        self._update_buttons_state()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _on_tree_select(self, _event=None) -> None:
        selection = self.tree.selection()
        self.vm.set_selection(int(selection[0]) if selection else None)

    def _on_selection_changed(self, category: Optional[Category]) -> None:
        self.budgets.show_category(category)
        self._update_buttons_state()

    def _on_add_click(self) -> None:
        CategoryDialog(self.winfo_toplevel(), vm=self.vm.edit_vm())

    def _on_edit_click(self) -> None:
        category = self.vm.selected()
        if category is None:
            return
        CategoryDialog(self.winfo_toplevel(), vm=self.vm.edit_vm(category))

    def _on_delete_click(self) -> None:
        category = self.vm.selected()
        if category is None:
            return
        if not messagebox.askyesno(
            "Delete",
            f"Delete category '{category.name}' and its budgets?",
            parent=self,
        ):
            return
        try:
            self.vm.cmd_delete_selected()
        except UseCaseError as exc:
            log.error("Delete category failed: %s", exc.message)
            messagebox.showerror("Delete", exc.message, parent=self)

    def _update_buttons_state(self) -> None:
        state = "normal" if self.vm.selected() is not None else "disabled"
        self.btn_edit.configure(state=state)
        self.btn_delete.configure(state=state)

    def _on_destroy(self, event) -> None:
        if event.widget is self:
            self.environment.data_context.remove_listener(self.refresh)
