from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from ..domain.ports import DataContextPort
from .error_mapping import map_persistence_error


@dataclass
class DeleteBudgets:
    context: DataContextPort

    def __call__(self, budget_ids: Iterable[int]) -> int:
        ids = list(budget_ids)
        if not ids:
            return 0
        try:
            for budget_id in ids:
                self.context.delete_budget(budget_id)
            self.context.save()
        except Exception as e:
            self.context.rollback()
            raise map_persistence_error(e, default_code="DELETE_BUDGETS_FAILED")
        return len(ids)
