"""Aggregate operations into per-month income/expense/balance series.

The result is a ``pandas.DataFrame`` consumed by ``StatisticsVM`` for the
chart and by the summary labels of the statistics window.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

import pandas as pd

from ..domain.entities import Operation, OperationKind
from ..domain.ports import DataContextPort
from .error_mapping import map_persistence_error

STAT_COLUMNS = ["income", "expense", "balance"]


def operations_frame(operations: List[Operation]) -> pd.DataFrame:
    """Tabular view of operations with float amounts (one row per operation)."""
    rows = [
        {
            "date": op.date,
            "month_key": op.month_key,
            "kind": op.kind.value,
            "title": op.title,
            "category": op.title_base,
            "amount": float(op.amount),
            "is_manual": op.is_manual,
        }
        for op in operations
    ]
    columns = ["date", "month_key", "kind", "title", "category", "amount", "is_manual"]
    return pd.DataFrame(rows, columns=columns)


@dataclass
class BuildMonthlyStatistics:
    context: DataContextPort

    def __call__(self, months: Optional[int] = None) -> pd.DataFrame:
        """Return a frame indexed by ``month_key`` sorted ascending.

        Args:
            months: Keep only the most recent ``months`` buckets when set.
        """
        try:
            frame = operations_frame(self.context.operations())
        except Exception as e:
            raise map_persistence_error(e, default_code="LOAD_STATISTICS_FAILED")
        if frame.empty:
            empty = pd.DataFrame(columns=STAT_COLUMNS, dtype=float)
            empty.index.name = "month_key"
            return empty

        frame["income"] = frame["amount"].where(frame["amount"] > 0, 0.0)
        frame["expense"] = (-frame["amount"]).where(frame["amount"] < 0, 0.0)
        stats = frame.groupby("month_key")[["income", "expense"]].sum().sort_index()
        stats["balance"] = stats["income"] - stats["expense"]
        stats = stats.round(2)
        if months is not None and months > 0:
            stats = stats.tail(months)
        return stats[STAT_COLUMNS]

    def breakdown(self, month_key: str, kind: OperationKind | str) -> pd.Series:
        """Totals per category (title base) for one month and kind, largest first."""
        kind = OperationKind.parse(kind)
        try:
            frame = operations_frame(self.context.operations(month_key=month_key, kind=kind))
        except Exception as e:
            raise map_persistence_error(e, default_code="LOAD_STATISTICS_FAILED")
        if frame.empty:
            return pd.Series(dtype=float, name="amount")
        totals = frame.groupby("category")["amount"].sum().abs().round(2)
        return totals.sort_values(ascending=False)

    def totals(self) -> dict:
        """Overall income/expense/balance as ``Decimal`` values."""
        try:
            operations = self.context.operations()
        except Exception as e:
            raise map_persistence_error(e, default_code="LOAD_STATISTICS_FAILED")
        income = sum((op.amount for op in operations if op.amount > 0), Decimal("0"))
        expense = sum((-op.amount for op in operations if op.amount < 0), Decimal("0"))
        return {"income": income, "expense": expense, "balance": income - expense}
