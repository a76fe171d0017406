from __future__ import annotations

import sqlite3
from datetime import date
from decimal import Decimal

import pytest

from finz.domain.entities import OperationKind
from finz.domain.ports import UseCaseError
from finz.usecases.add_operation import AddOperation


def test_expense_is_stored_negative_with_clamped_day(store):
    ctx = store.view_context

    saved = AddOperation(ctx)("expense", "12,50", 2024, 2, 31, "Nourriture", " Pain ")

    (stored,) = ctx.operations()
    assert stored == saved
    assert stored.date == date(2024, 2, 29)
    assert stored.amount == Decimal("-12.50")
    assert stored.kind is OperationKind.EXPENSE
    assert stored.title == "Nourriture — Pain"
    assert stored.month_key == "2024-02"
    assert stored.is_manual is True


def test_income_without_description_uses_category_title(store):
    saved = AddOperation(store.view_context)(OperationKind.INCOME, "2500", 2024, 5, 1, "Salaire")

    assert saved.amount == Decimal("2500.00")
    assert saved.title == "Salaire"


@pytest.mark.parametrize(
    "amount, category, month, code, message",
    [
        ("0", "Salaire", 5, "INVALID_AMOUNT", "Montant invalide"),
        ("-3", "Salaire", 5, "INVALID_AMOUNT", "Montant invalide"),
        ("abc", "Salaire", 5, "INVALID_AMOUNT", "Montant invalide"),
        ("10", "   ", 5, "CATEGORY_REQUIRED", "Catégorie requise"),
        ("10", "Salaire", 13, "INVALID_DATE", "Date invalide"),
    ],
)
def test_validation_errors(store, amount, category, month, code, message):
    with pytest.raises(UseCaseError) as info:
        AddOperation(store.view_context)("income", amount, 2024, month, 1, category)

    assert info.value.code == code
    assert info.value.message == message
    assert store.view_context.count("operation") == 0


class _FailingContext:
    def __init__(self) -> None:
        self.rolled_back = False

    def insert_operation(self, operation):
        raise sqlite3.OperationalError("disk I/O error")

    def save(self) -> None:  # pragma: no cover - never reached
        raise AssertionError("save must not be called")

    def rollback(self) -> None:
        self.rolled_back = True


def test_store_failure_rolls_back_and_maps_error():
    ctx = _FailingContext()

    with pytest.raises(UseCaseError) as info:
        AddOperation(ctx)("income", "10", 2024, 1, 1, "Vente")  # type: ignore[arg-type]

    assert ctx.rolled_back is True
    assert info.value.code == "SAVE_OPERATION_FAILED"
    assert info.value.message == "Database error: disk I/O error"
