from __future__ import annotations

"""Domain value objects and entities shared across adapters, use-cases, and view models."""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple
from uuid import uuid4

from .money import month_key as _month_key


class DebCred(str, Enum):
    """Direction of money flow for an operation category."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    @classmethod
    def parse(cls, value: object) -> "DebCred":
        """Return the enum member for ``value``; empty or unknown -> DEBIT."""
        if isinstance(value, DebCred):
            return value
        text = str(value or "").strip().upper()
        try:
            return cls(text)
        except ValueError:
            return cls.DEBIT


class Periodicite(str, Enum):
    """Recurrence of a budget line."""

    HEBDOMADAIRE = "HEBDOMADAIRE"
    MENSUEL = "MENSUEL"
    ANNUEL = "ANNUEL"

    @classmethod
    def parse(cls, value: object) -> "Periodicite":
        """Case-insensitive lookup ("Mensuel" -> MENSUEL); unknown -> MENSUEL."""
        if isinstance(value, Periodicite):
            return value
        text = str(value or "").strip().upper()
        try:
            return cls(text)
        except ValueError:
            return cls.MENSUEL


class OperationKind(str, Enum):
    """Manual operation kind entered from the quick add sheet."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def display_name(self) -> str:
        return "Recette" if self is OperationKind.INCOME else "Dépense"

    @property
    def categories(self) -> Tuple[str, ...]:
        return INCOME_CATEGORIES if self is OperationKind.INCOME else EXPENSE_CATEGORIES

    @classmethod
    def parse(cls, value: object) -> "OperationKind":
        if isinstance(value, OperationKind):
            return value
        text = str(value or "").strip().lower()
        return cls(text)


INCOME_CATEGORIES: Tuple[str, ...] = ("Salaire", "Vente", "Prime", "Bourse", "Autres")
EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Nourriture",
    "Logement",
    "Transport",
    "Divertissement",
    "Abonnement",
    "Autres",
)

TITLE_SEPARATOR = " — "


@dataclass(frozen=True)
class Category:
    """Operation category (``CategorieOperation`` rows)."""

    name: str
    debcred: DebCred = DebCred.DEBIT
    id: Optional[int] = None

    def with_id(self, new_id: int) -> "Category":
        return replace(self, id=new_id)


@dataclass(frozen=True)
class Budget:
    """Planned recurring amount attached to one category."""

    category_id: int
    description: str
    amount: Decimal
    periodicite: Periodicite = Periodicite.MENSUEL
    complement: str = ""
    id: Optional[int] = None

    def with_id(self, new_id: int) -> "Budget":
        return replace(self, id=new_id)


@dataclass(frozen=True)
class Operation:
    """Dated income or expense occurrence.

    ``amount`` is signed: positive for income, negative for expenses.
    ``month_key`` is derived from ``date`` when left empty.
    """

    date: date
    amount: Decimal
    kind: OperationKind
    title: str
    is_manual: bool = True
    month_key: str = ""
    uid: str = field(default_factory=lambda: str(uuid4()))
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.month_key:
            object.__setattr__(self, "month_key", _month_key(self.date))

    def with_id(self, new_id: int) -> "Operation":
        return replace(self, id=new_id)

    @property
    def title_base(self) -> str:
        """Category part of the title (text before the description separator)."""
        return self.title.split(TITLE_SEPARATOR, 1)[0]


__all__ = [
    "Budget",
    "Category",
    "DebCred",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "Operation",
    "OperationKind",
    "Periodicite",
    "TITLE_SEPARATOR",
]
