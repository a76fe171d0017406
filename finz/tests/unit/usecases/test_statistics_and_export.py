from __future__ import annotations

from decimal import Decimal

import pandas as pd
import pytest

from finz.usecases.add_operation import AddOperation
from finz.usecases.export_operations import EXPORT_COLUMNS, ExportOperations
from finz.usecases.monthly_statistics import STAT_COLUMNS, BuildMonthlyStatistics


@pytest.fixture
def ledger(store):
    add = AddOperation(store.view_context)
    add("income", "1000", 2024, 1, 3, "Salaire")
    add("expense", "200", 2024, 1, 10, "Logement", "Janvier")
    add("expense", "50", 2024, 2, 2, "Transport")
    return store.view_context


def test_monthly_statistics_aggregates_by_month(ledger):
    stats = BuildMonthlyStatistics(ledger)()

    assert list(stats.columns) == STAT_COLUMNS
    assert list(stats.index) == ["2024-01", "2024-02"]
    assert stats.loc["2024-01", "income"] == pytest.approx(1000.0)
    assert stats.loc["2024-01", "expense"] == pytest.approx(200.0)
    assert stats.loc["2024-01", "balance"] == pytest.approx(800.0)
    assert stats.loc["2024-02", "income"] == pytest.approx(0.0)
    assert stats.loc["2024-02", "balance"] == pytest.approx(-50.0)


def test_monthly_statistics_keeps_most_recent_months(ledger):
    stats = BuildMonthlyStatistics(ledger)(months=1)

    assert list(stats.index) == ["2024-02"]


def test_monthly_statistics_on_empty_store(store):
    stats = BuildMonthlyStatistics(store.view_context)()

    assert stats.empty
    assert stats.index.name == "month_key"
    assert list(stats.columns) == STAT_COLUMNS


def test_breakdown_groups_by_title_base(ledger):
    totals = BuildMonthlyStatistics(ledger).breakdown("2024-01", "expense")

    assert totals.to_dict() == {"Logement": pytest.approx(200.0)}


def test_totals_are_decimals(ledger):
    totals = BuildMonthlyStatistics(ledger).totals()

    assert totals == {
        "income": Decimal("1000.00"),
        "expense": Decimal("250.00"),
        "balance": Decimal("750.00"),
    }


def test_export_writes_every_operation(ledger, tmp_path):
    target = tmp_path / "exports" / "ops.csv"

    written = ExportOperations(ledger)(target)

    assert written == target
    frame = pd.read_csv(written)
    assert list(frame.columns) == EXPORT_COLUMNS
    assert frame["amount"].tolist() == [1000.0, -200.0, -50.0]
    assert frame["title"].tolist() == ["Salaire", "Logement — Janvier", "Transport"]
    assert frame["month_key"].tolist() == ["2024-01", "2024-01", "2024-02"]


def test_export_of_empty_store_writes_header_only(store, tmp_path):
    written = ExportOperations(store.view_context)(str(tmp_path / "empty.csv"))

    assert written.read_text(encoding="utf-8").strip() == ",".join(EXPORT_COLUMNS)
