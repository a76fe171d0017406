from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal

import pytest

from finz.adapters.persistence_sqlite import PersistenceController, PersistenceError
from finz.domain.entities import Category, DebCred, Operation, OperationKind, Periodicite


def test_shared_returns_the_same_instance(tmp_path, monkeypatch):
    monkeypatch.setenv("FINZ_DB_PATH", str(tmp_path / "shared.sqlite3"))

    first = PersistenceController.shared()
    second = PersistenceController.shared()

    assert first is second
    assert first.container.store_location == str(tmp_path / "shared.sqlite3")


def test_view_context_is_the_container_context(seeded_store):
    assert seeded_store.view_context is seeded_store.container.view_context


def test_seed_inserts_default_categories_and_budgets(seeded_store):
    ctx = seeded_store.view_context

    assert ctx.count("category") == 3
    assert ctx.count("budget") == 3
    assert [(c.name, c.debcred) for c in ctx.categories()] == [
        ("Courses", DebCred.DEBIT),
        ("Loyer", DebCred.DEBIT),
        ("Salaire", DebCred.CREDIT),
    ]

    salaire = next(c for c in ctx.categories() if c.name == "Salaire")
    (budget,) = ctx.budgets(salaire.id)
    assert budget.description == "Salaire Mensuel"
    assert budget.amount == Decimal("2500.00")
    assert budget.periodicite is Periodicite.MENSUEL

    courses = next(c for c in ctx.categories() if c.name == "Courses")
    assert ctx.budgets(courses.id)[0].periodicite is Periodicite.HEBDOMADAIRE


def test_seed_is_a_noop_on_non_empty_store(seeded_store):
    assert seeded_store.seed_if_needed() is False
    assert seeded_store.view_context.count("category") == 3


def test_reopening_a_file_store_does_not_duplicate_seed(tmp_path):
    db_path = tmp_path / "data" / "finz.sqlite3"
    first = PersistenceController(db_path=db_path)
    first.close()

    reopened = PersistenceController(db_path=db_path)
    try:
        assert db_path.exists()
        assert reopened.view_context.count("category") == 3
        assert reopened.view_context.count("budget") == 3
    finally:
        reopened.close()


def test_deleting_a_category_removes_its_budgets(seeded_store):
    ctx = seeded_store.view_context
    salaire = next(c for c in ctx.categories() if c.name == "Salaire")

    ctx.delete_category(salaire.id)
    ctx.save()

    assert ctx.category(salaire.id) is None
    assert ctx.budgets(salaire.id) == []
    assert ctx.count("budget") == 2


def test_rollback_discards_pending_changes(store):
    ctx = store.view_context
    assert ctx.has_changes is False

    ctx.save_category(Category(name="Transport"))
    assert ctx.has_changes is True

    ctx.rollback()

    assert ctx.has_changes is False
    assert ctx.count("category") == 0


def test_listeners_fire_only_after_save(store):
    ctx = store.view_context
    calls = []

    def listener():
        calls.append(ctx.count("category"))

    ctx.add_listener(listener)
    ctx.add_listener(listener)

    ctx.save_category(Category(name="Loisirs"))
    assert calls == []

    ctx.save()
    assert calls == [1]

    ctx.save()
    assert calls == [1]

    ctx.remove_listener(listener)
    ctx.save_category(Category(name="Impots"))
    ctx.save()
    assert calls == [1]


def test_update_keeps_identity_and_last_save_wins(store):
    ctx = store.view_context
    saved = ctx.save_category(Category(name="Divers"))
    ctx.save()

    ctx.save_category(Category(name="Divers 2", debcred=DebCred.CREDIT, id=saved.id))
    ctx.save()

    reloaded = ctx.category(saved.id)
    assert reloaded == Category(name="Divers 2", debcred=DebCred.CREDIT, id=saved.id)
    assert ctx.count("category") == 1


def test_operations_filter_by_month_and_kind(store):
    ctx = store.view_context
    ctx.insert_operation(
        Operation(date=date(2024, 1, 5), amount=Decimal("100.00"), kind=OperationKind.INCOME, title="Vente")
    )
    ctx.insert_operation(
        Operation(date=date(2024, 1, 9), amount=Decimal("-20.50"), kind=OperationKind.EXPENSE, title="Transport")
    )
    ctx.insert_operation(
        Operation(date=date(2024, 2, 1), amount=Decimal("-5.00"), kind=OperationKind.EXPENSE, title="Abonnement")
    )
    ctx.save()

    assert [op.title for op in ctx.operations()] == ["Vente", "Transport", "Abonnement"]
    january_expenses = ctx.operations(month_key="2024-01", kind=OperationKind.EXPENSE)
    assert [op.amount for op in january_expenses] == [Decimal("-20.50")]
    assert january_expenses[0].month_key == "2024-01"
    assert ctx.count("operation") == 3

    ctx.delete_operation(january_expenses[0].id)
    ctx.save()
    assert [op.title for op in ctx.operations()] == ["Vente", "Abonnement"]


def test_count_rejects_unknown_entity(store):
    with pytest.raises(ValueError):
        store.view_context.count("invoice")  # type: ignore[arg-type]


def test_unopenable_store_raises_persistence_error(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(PersistenceError):
        PersistenceController(db_path=blocker / "finz.sqlite3")


def test_view_context_after_close_raises(store):
    store.close()

    with pytest.raises(PersistenceError):
        store.view_context


def test_preview_has_five_alternating_categories():
    controller = PersistenceController.preview()
    try:
        categories = controller.view_context.categories()
    finally:
        controller.close()

    assert [c.name for c in categories] == [f"Category {i}" for i in range(1, 6)]
    assert [c.debcred for c in categories] == [
        DebCred.CREDIT,
        DebCred.DEBIT,
        DebCred.CREDIT,
        DebCred.DEBIT,
        DebCred.CREDIT,
    ]


def test_failing_listener_does_not_break_save_or_other_listeners(store, caplog):
    ctx = store.view_context
    later_calls = []

    def stale_view():
        raise RuntimeError("stale view")

    ctx.add_listener(stale_view)
    ctx.add_listener(lambda: later_calls.append(ctx.count("category")))

    ctx.save_category(Category(name="Loisirs"))
    ctx.save()

    assert ctx.has_changes is False
    assert [c.name for c in ctx.categories()] == ["Loisirs"]
    assert later_calls == [1]
    assert "listener" in caplog.text


def test_shared_created_on_a_worker_thread_is_usable_from_main_thread(tmp_path, monkeypatch):
    monkeypatch.setenv("FINZ_DB_PATH", str(tmp_path / "threaded.sqlite3"))
    created = []

    worker = threading.Thread(target=lambda: created.append(PersistenceController.shared()))
    worker.start()
    worker.join()

    (controller,) = created
    assert controller is PersistenceController.shared()
    assert controller.view_context.count("category") == 3

    PersistenceController.reset_shared()
    with pytest.raises(PersistenceError):
        controller.view_context
