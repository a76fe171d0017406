"""Category list and category editor view models.

Call context:
    ``CategoriesView`` (the root view) owns one ``CategoriesVM`` built from the
    environment's data context; ``CategoryDialog`` owns a ``CategoryEditVM``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from ..domain.entities import Category, DebCred
from ..domain.ports import DataContextPort
from ..usecases.delete_category import DeleteCategory
from ..usecases.save_category import SaveCategory


@dataclass
class CategoryRow:
    """Display row model for the category list."""

    id: int
    name: str
    debcred: str


class CategoriesVM:
    """List state for categories: rows, selection, delete command."""

    def __init__(
        self,
        context: DataContextPort,
        *,
        on_selection_changed: Optional[Callable[[Optional[Category]], None]] = None,
    ) -> None:
        self._context = context
        self.on_selection_changed = on_selection_changed
        self._uc_delete = DeleteCategory(context)
        self._categories: List[Category] = []
        self._selected_id: Optional[int] = None
        self.refresh()

    @property
    def title(self) -> str:
        return "Categories"

    def refresh(self) -> List[CategoryRow]:
        """Re-query categories; drop the selection when it no longer exists."""
        self._categories = self._context.categories()
        if self._selected_id is not None and self.selected() is None:
            self.set_selection(None)
        return self.rows()

    def rows(self) -> List[CategoryRow]:
        return [
            CategoryRow(id=int(c.id), name=c.name, debcred=c.debcred.value)  # type: ignore[arg-type]
            for c in self._categories
        ]

    # ---- Selection ----
    def set_selection(self, category_id: Optional[int]) -> None:
        self._selected_id = category_id
        if self.on_selection_changed:
            self.on_selection_changed(self.selected())

    def selected(self) -> Optional[Category]:
        for category in self._categories:
            if category.id == self._selected_id:
                return category
        return None

    # ---- Commands ----
    def cmd_delete_selected(self) -> bool:
        category = self.selected()
        if category is None or category.id is None:
            return False
        self._uc_delete(category.id)
        self.refresh()
        return True

    def edit_vm(self, category: Optional[Category] = None) -> "CategoryEditVM":
        return CategoryEditVM(self._context, category=category)


class CategoryEditVM:
    """Form state for adding or editing one category."""

    def __init__(self, context: DataContextPort, *, category: Optional[Category] = None) -> None:
        self._uc_save = SaveCategory(context)
        self.category = category
        self.name: str = category.name if category else ""
        self.debcred: DebCred = category.debcred if category else DebCred.DEBIT

    @property
    def title(self) -> str:
        return "Add Category" if self.category is None else "Edit Category"

    @property
    def can_save(self) -> bool:
        return bool(self.name.strip())

    def set_name(self, value: str) -> None:
        self.name = value or ""

    def set_debcred(self, value: DebCred | str) -> None:
        self.debcred = DebCred.parse(value)

    def cmd_save(self) -> Category:
        category_id = self.category.id if self.category else None
        saved = self._uc_save(self.name, self.debcred, category_id=category_id)
        self.category = saved
        return saved
