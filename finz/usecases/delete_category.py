from __future__ import annotations
from dataclasses import dataclass

from ..domain.ports import DataContextPort
from .error_mapping import map_persistence_error


@dataclass
class DeleteCategory:
    """Delete one category; its budgets go with it."""

    context: DataContextPort

    def __call__(self, category_id: int) -> None:
        try:
            self.context.delete_category(category_id)
            self.context.save()
        except Exception as e:
            self.context.rollback()
            raise map_persistence_error(e, default_code="DELETE_CATEGORY_FAILED")
