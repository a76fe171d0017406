"""Domain package exports for entities, money helpers and ports."""

from .entities import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    TITLE_SEPARATOR,
    Budget,
    Category,
    DebCred,
    Operation,
    OperationKind,
    Periodicite,
)
from .money import (
    clamp_day,
    days_in_month,
    format_amount,
    format_currency,
    month_key,
    parse_amount,
)
from .ports import DataContextPort, StoragePort, UseCaseError

__all__ = [
    "Budget",
    "Category",
    "DataContextPort",
    "DebCred",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "Operation",
    "OperationKind",
    "Periodicite",
    "StoragePort",
    "TITLE_SEPARATOR",
    "UseCaseError",
    "clamp_day",
    "days_in_month",
    "format_amount",
    "format_currency",
    "month_key",
    "parse_amount",
]
