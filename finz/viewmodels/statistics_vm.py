"""Chart projection of the monthly statistics for ``StatisticsWindow``.

Call context:
    ``App`` builds one ``StatisticsVM`` per statistics window and refreshes
    it whenever the data context reports a save.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from ..domain.money import format_currency
from ..domain.ports import DataContextPort
from ..usecases.monthly_statistics import BuildMonthlyStatistics


@dataclass
class ChartSeries:
    """Plain lists handed to the matplotlib view."""

    labels: List[str] = field(default_factory=list)
    incomes: List[float] = field(default_factory=list)
    expenses: List[float] = field(default_factory=list)
    balances: List[float] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.labels


class StatisticsVM:
    def __init__(
        self,
        context: DataContextPort,
        *,
        months: Optional[int] = 12,
        currency_symbol: str = "€",
    ) -> None:
        self._uc_stats = BuildMonthlyStatistics(context)
        self.months = months
        self.currency_symbol = currency_symbol
        self.frame: pd.DataFrame = pd.DataFrame()
        self.series = ChartSeries()
        self.summary: str = ""

    def refresh(self) -> ChartSeries:
        self.frame = self._uc_stats(self.months or None)
        self.series = ChartSeries(
            labels=[str(key) for key in self.frame.index],
            incomes=[float(v) for v in self.frame.get("income", [])],
            expenses=[float(v) for v in self.frame.get("expense", [])],
            balances=[float(v) for v in self.frame.get("balance", [])],
        )
        totals = self._uc_stats.totals()
        self.summary = "Recettes {income} · Dépenses {expense} · Solde {balance}".format(
            income=format_currency(totals["income"], self.currency_symbol),
            expense=format_currency(totals["expense"], self.currency_symbol),
            balance=format_currency(totals["balance"], self.currency_symbol),
        )
        return self.series

    def breakdown_rows(self, month_key: str, kind: str) -> List[tuple]:
        """``(category, formatted total)`` pairs for one month and kind."""
        totals = self._uc_stats.breakdown(month_key, kind)
        return [
            (str(category), format_currency(float(value), self.currency_symbol))
            for category, value in totals.items()
        ]
