from __future__ import annotations
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Protocol, Sequence

from .entities import Budget, Category, Operation, OperationKind

EntityName = Literal["category", "budget", "operation"]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta or {}


# ---- Ports (Hexagonal boundaries) ----
class DataContextPort(Protocol):
    """Read/write handle over persisted entities (unit of work).

    Mutations stay pending until ``save``; ``rollback`` discards them.
    Listeners registered via ``add_listener`` run after every successful save.
    """

    @property
    def has_changes(self) -> bool: ...

    def categories(self) -> List[Category]: ...
    def category(self, category_id: int) -> Optional[Category]: ...
    def save_category(self, category: Category) -> Category: ...
    def delete_category(self, category_id: int) -> None: ...

    def budgets(self, category_id: int) -> List[Budget]: ...
    def budget(self, budget_id: int) -> Optional[Budget]: ...
    def save_budget(self, budget: Budget) -> Budget: ...
    def delete_budget(self, budget_id: int) -> None: ...

    def operations(
        self, month_key: Optional[str] = None, kind: Optional[OperationKind] = None
    ) -> List[Operation]: ...
    def insert_operation(self, operation: Operation) -> Operation: ...
    def delete_operation(self, operation_id: int) -> None: ...

    def count(self, entity: EntityName) -> int: ...
    def save(self) -> None: ...
    def rollback(self) -> None: ...
    def add_listener(self, callback: Callable[[], None]) -> None: ...
    def remove_listener(self, callback: Callable[[], None]) -> None: ...


class StoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: Mapping[str, Any]) -> None: ...
    def load_user_settings(self) -> Optional[Dict[str, Any]]: ...


__all__: Sequence[str] = ["DataContextPort", "EntityName", "StoragePort", "UseCaseError"]
