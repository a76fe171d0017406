from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Tuple

from ..domain.entities import Operation, OperationKind
from ..domain.money import days_in_month
from ..domain.ports import DataContextPort, UseCaseError
from ..usecases.add_operation import AddOperation


class AddOperationVM:
    """State of the quick "Nouvelle opération" sheet.

    The day spinner is bounded by ``max_day``; the category resets to the
    first entry of the kind's list whenever the kind changes.
    """

    def __init__(
        self,
        context: DataContextPort,
        *,
        default_date: Optional[date] = None,
        on_saved: Optional[Callable[[Operation], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ) -> None:
        self._uc_add = AddOperation(context)
        self.on_saved = on_saved
        self.on_cancel = on_cancel
        when = default_date or date.today()
        self.kind: OperationKind = OperationKind.INCOME
        self.amount_text: str = ""
        self.year: int = when.year
        self.month: int = when.month
        self.day: int = when.day
        self.category: str = self.current_categories[0]
        self.description: str = ""
        self.error: Optional[str] = None

    @property
    def title(self) -> str:
        return "Nouvelle opération"

    @property
    def current_categories(self) -> Tuple[str, ...]:
        return self.kind.categories

    @property
    def max_day(self) -> int:
        return days_in_month(self.year, self.month)

    def set_kind(self, kind: OperationKind | str) -> None:
        parsed = OperationKind.parse(kind)
        if parsed is not self.kind:
            self.kind = parsed
            self.category = self.current_categories[0]

    def set_month(self, month: int) -> None:
        month = int(month)
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month '{month}'")
        self.month = month
        self.day = min(self.day, self.max_day)

    def set_day(self, day: int) -> None:
        self.day = min(max(1, int(day)), self.max_day)

    def cmd_save(self) -> bool:
        """Validate and persist; on failure ``error`` holds the message."""
        self.error = None
        try:
            saved = self._uc_add(
                self.kind,
                self.amount_text,
                self.year,
                self.month,
                self.day,
                self.category,
                self.description,
            )
        except UseCaseError as exc:
            self.error = exc.message
            return False
        if self.on_saved:
            self.on_saved(saved)
        return True

    def cmd_cancel(self) -> None:
        if self.on_cancel:
            self.on_cancel()
