"""Monthly income/expense chart with a per-category breakdown.

The chart is drawn with matplotlib into a ``FigureCanvasTkAgg``; data comes
from ``StatisticsVM`` and is re-read every time the data context saves.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg, NavigationToolbar2Tk

from ...domain.entities import OperationKind
from ...viewmodels.statistics_vm import StatisticsVM
from ..environment import Environment
from .theme import EXPENSE_RED, FINZ_PURPLE, INCOME_GREEN

BAR_WIDTH = 0.38


class StatisticsWindow(tk.Toplevel):
    def __init__(self, parent: tk.Widget, *, environment: Environment) -> None:
        super().__init__(parent)
        self.environment = environment
        self.vm = StatisticsVM(
            environment.data_context,
            months=environment.settings.statistics_months,
            currency_symbol=environment.settings.currency_symbol,
        )
        self.title("Statistiques")
        self.geometry("900x620")
        self.transient(parent)
        self.protocol("WM_DELETE_WINDOW", self.destroy)

        self.summary_var = tk.StringVar(value="")
        self.month_var = tk.StringVar(value="")
        self.kind_var = tk.StringVar(value=OperationKind.EXPENSE.value)

        self._build_ui()
        environment.data_context.add_listener(self.refresh)
        self.bind("<Destroy>", self._on_destroy, add="+")
        self.refresh()

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        ttk.Label(self, textvariable=self.summary_var, style="Title.TLabel").pack(
            side=tk.TOP, anchor="w", padx=10, pady=(10, 4)
        )

        graph_frame = ttk.Frame(self)
        graph_frame.pack(side=tk.TOP, expand=True, fill=tk.BOTH, padx=10)
        self.fig, self.ax = plt.subplots(figsize=(8, 4))
        self.canvas = FigureCanvasTkAgg(self.fig, master=graph_frame)
        self.canvas.draw()
        self.canvas.get_tk_widget().pack(expand=True, fill=tk.BOTH)
        toolbar = NavigationToolbar2Tk(self.canvas, graph_frame)
        toolbar.update()

        details = ttk.Labelframe(self, text="Détail par catégorie")
        details.pack(side=tk.BOTTOM, fill=tk.X, padx=10, pady=10)
        controls = ttk.Frame(details)
        controls.pack(side=tk.TOP, fill=tk.X, padx=6, pady=6)
        ttk.Label(controls, text="Mois").pack(side=tk.LEFT)
        self.month_box = ttk.Combobox(controls, textvariable=self.month_var, width=10, state="readonly")
        self.month_box.pack(side=tk.LEFT, padx=(4, 12))
        self.month_box.bind("<<ComboboxSelected>>", lambda _e: self._render_breakdown())
        for kind in OperationKind:
            ttk.Radiobutton(
                controls,
                text=kind.display_name,
                value=kind.value,
                variable=self.kind_var,
                command=self._render_breakdown,
            ).pack(side=tk.LEFT, padx=(0, 8))

        self.breakdown = ttk.Treeview(details, columns=("category", "total"), show="headings", height=5)
        self.breakdown.heading("category", text="Catégorie")
        self.breakdown.heading("total", text="Total")
        self.breakdown.column("category", width=240, anchor=tk.W)
        self.breakdown.column("total", width=120, anchor=tk.E)
        self.breakdown.pack(side=tk.TOP, fill=tk.X, padx=6, pady=(0, 6))

    # ------------------------------------------------------------------
    def refresh(self) -> None:
        series = self.vm.refresh()
        self.summary_var.set(self.vm.summary)
        self._draw(series)
        self.month_box.configure(values=series.labels)
        if series.labels and self.month_var.get() not in series.labels:
            self.month_var.set(series.labels[-1])
        self._render_breakdown()

    def _draw(self, series) -> None:
        ax = self.ax
        ax.clear()
        if series.empty:
            ax.text(0.5, 0.5, "Aucune opération", ha="center", va="center", transform=ax.transAxes)
            ax.set_xticks([])
            ax.set_yticks([])
        else:
            x = np.arange(len(series.labels))
            ax.bar(x - BAR_WIDTH / 2, series.incomes, BAR_WIDTH, label="Recettes", color=INCOME_GREEN)
            ax.bar(x + BAR_WIDTH / 2, series.expenses, BAR_WIDTH, label="Dépenses", color=EXPENSE_RED)
            ax.plot(x, series.balances, marker="o", label="Solde", color=FINZ_PURPLE)
            ax.axhline(0, color="#999999", linewidth=0.8)
            ax.set_xticks(x)
            ax.set_xticklabels(series.labels, rotation=45, ha="right")
            ax.set_ylabel(self.vm.currency_symbol)
            ax.legend(loc="upper left")
        self.fig.tight_layout()
        self.canvas.draw_idle()

    def _render_breakdown(self) -> None:
        self.breakdown.delete(*self.breakdown.get_children())
        month_key = self.month_var.get()
        if not month_key:
            return
        for category, total in self.vm.breakdown_rows(month_key, self.kind_var.get()):
            self.breakdown.insert("", tk.END, values=(category, total))

    def _on_destroy(self, event) -> None:
        if event.widget is not self:
            return
        self.environment.data_context.remove_listener(self.refresh)
        plt.close(self.fig)
