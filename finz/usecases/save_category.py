from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from ..domain.entities import Category, DebCred
from ..domain.ports import DataContextPort, UseCaseError
from .error_mapping import map_persistence_error

log = logging.getLogger(__name__)


@dataclass
class SaveCategory:
    context: DataContextPort

    def __call__(
        self,
        name: str,
        debcred: DebCred | str = DebCred.DEBIT,
        category_id: Optional[int] = None,
    ) -> Category:
        clean = (name or "").strip()
        if not clean:
            raise UseCaseError("CATEGORY_NAME_REQUIRED", "Category name is required.")
        category = Category(name=clean, debcred=DebCred.parse(debcred), id=category_id)
        try:
            saved = self.context.save_category(category)
            self.context.save()
        except Exception as e:
            self.context.rollback()
            raise map_persistence_error(e, default_code="SAVE_CATEGORY_FAILED")
        log.info("Saved category %s (%s)", saved.name, saved.debcred.value)
        return saved
