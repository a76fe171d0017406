from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..domain.entities import Budget, Category, Periodicite
from ..domain.money import format_amount, format_currency, parse_amount
from ..domain.ports import DataContextPort
from ..usecases.delete_budgets import DeleteBudgets
from ..usecases.save_budget import SaveBudget


@dataclass
class BudgetRow:
    """Display row model consumed by ``BudgetsView``."""

    id: int
    description: str
    amount: str
    periodicite: str
    complement: str


class BudgetsVM:
    """Budgets of one category, sorted by description."""

    def __init__(
        self,
        context: DataContextPort,
        category: Optional[Category] = None,
        *,
        currency_symbol: str = "€",
    ) -> None:
        self._context = context
        self._uc_delete = DeleteBudgets(context)
        self.currency_symbol = currency_symbol
        self.category = category
        self._budgets: List[Budget] = []
        self.refresh()

    @property
    def title(self) -> str:
        if self.category is None:
            return "Budgets"
        return f"Budgets for {self.category.name}"

    def set_category(self, category: Optional[Category]) -> None:
        self.category = category
        self.refresh()

    def refresh(self) -> List[BudgetRow]:
        """Re-query the category (it may be renamed or deleted) and its budgets."""
        if self.category is not None and self.category.id is not None:
            self.category = self._context.category(self.category.id)
        if self.category is None or self.category.id is None:
            self._budgets = []
        else:
            self._budgets = self._context.budgets(self.category.id)
        return self.rows()

    def rows(self) -> List[BudgetRow]:
        return [
            BudgetRow(
                id=int(b.id),  # type: ignore[arg-type]
                description=b.description,
                amount=format_currency(b.amount, self.currency_symbol),
                periodicite=b.periodicite.value,
                complement=b.complement,
            )
            for b in self._budgets
        ]

    def budget(self, budget_id: int) -> Optional[Budget]:
        for budget in self._budgets:
            if budget.id == budget_id:
                return budget
        return None

    def cmd_delete(self, budget_ids: Iterable[int]) -> int:
        deleted = self._uc_delete(budget_ids)
        self.refresh()
        return deleted

    def edit_vm(self, budget: Optional[Budget] = None) -> "BudgetEditVM":
        if self.category is None or self.category.id is None:
            raise ValueError("No category selected")
        return BudgetEditVM(self._context, self.category, budget=budget)


class BudgetEditVM:
    """Form state for adding or editing one budget of a category."""

    def __init__(
        self,
        context: DataContextPort,
        category: Category,
        *,
        budget: Optional[Budget] = None,
    ) -> None:
        self._uc_save = SaveBudget(context)
        self.category = category
        self.budget = budget
        self.description: str = budget.description if budget else ""
        self.amount_text: str = format_amount(budget.amount) if budget else ""
        self.periodicite: Periodicite = budget.periodicite if budget else Periodicite.MENSUEL
        self.complement: str = budget.complement if budget else ""

    @property
    def title(self) -> str:
        return "Ajouter Budget" if self.budget is None else "Modifier Budget"

    @property
    def can_save(self) -> bool:
        if not self.description.strip():
            return False
        return parse_amount(self.amount_text) is not None

    def set_periodicite(self, value: Periodicite | str) -> None:
        self.periodicite = Periodicite.parse(value)

    def cmd_save(self) -> Budget:
        saved = self._uc_save(
            int(self.category.id),  # type: ignore[arg-type]
            self.description,
            self.amount_text,
            self.periodicite,
            self.complement,
            budget_id=self.budget.id if self.budget else None,
        )
        self.budget = saved
        return saved
