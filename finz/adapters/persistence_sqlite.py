"""SQLite-backed persistence controller, container and data-access context.

The controller owns one :class:`PersistentContainer`; the container owns one
SQLite connection and exposes it through a single :class:`DataContext` (the
"view context") that views and use cases read and write through.

Call context:
    ``finz.app.main.App.start`` obtains ``PersistenceController.shared()``
    (or an injected instance) and forwards ``view_context`` into the view
    environment.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..domain.entities import (
    Budget,
    Category,
    DebCred,
    Operation,
    OperationKind,
    Periodicite,
)
from ..domain.ports import EntityName
from ..utils.storage_paths import default_db_path

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS categories (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  debcred TEXT NOT NULL DEFAULT 'DEBIT'
);

CREATE TABLE IF NOT EXISTS budgets (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  category_id INTEGER NOT NULL,
  description TEXT NOT NULL,
  amount TEXT NOT NULL,
  periodicite TEXT NOT NULL DEFAULT 'MENSUEL',
  complement TEXT NOT NULL DEFAULT '',
  FOREIGN KEY(category_id) REFERENCES categories(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS operations (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  uid TEXT UNIQUE NOT NULL,
  date TEXT NOT NULL,
  amount TEXT NOT NULL,
  kind TEXT NOT NULL,
  title TEXT NOT NULL,
  is_manual INTEGER NOT NULL DEFAULT 1,
  month_key TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_budgets_category ON budgets(category_id);
CREATE INDEX IF NOT EXISTS idx_operations_month ON operations(month_key);
"""

_TABLES: Dict[str, str] = {
    "category": "categories",
    "budget": "budgets",
    "operation": "operations",
}

SEED_CATEGORIES = (
    ("Salaire", DebCred.CREDIT),
    ("Loyer", DebCred.DEBIT),
    ("Courses", DebCred.DEBIT),
)
SEED_BUDGETS = (
    ("Salaire", "Salaire Mensuel", Decimal("2500.00"), Periodicite.MENSUEL),
    ("Loyer", "Loyer Mensuel", Decimal("800.00"), Periodicite.MENSUEL),
    ("Courses", "Courses Hebdo", Decimal("150.00"), Periodicite.HEBDOMADAIRE),
)

Listener = Callable[[], None]


class PersistenceError(RuntimeError):
    """Raised when the persistent store cannot be opened or seeded."""


# ---- Row mappers ----
def category_from_row(row: Mapping[str, Any]) -> Category:
    return Category(
        id=int(row["id"]),
        name=str(row["name"]),
        debcred=DebCred.parse(row["debcred"]),
    )


def budget_from_row(row: Mapping[str, Any]) -> Budget:
    return Budget(
        id=int(row["id"]),
        category_id=int(row["category_id"]),
        description=str(row["description"]),
        amount=Decimal(str(row["amount"])),
        periodicite=Periodicite.parse(row["periodicite"]),
        complement=str(row["complement"] or ""),
    )


def operation_from_row(row: Mapping[str, Any]) -> Operation:
    return Operation(
        id=int(row["id"]),
        uid=str(row["uid"]),
        date=date.fromisoformat(str(row["date"])),
        amount=Decimal(str(row["amount"])),
        kind=OperationKind.parse(row["kind"]),
        title=str(row["title"]),
        is_manual=bool(row["is_manual"]),
        month_key=str(row["month_key"]),
    )


class DataContext:
    """Unit-of-work handle over the SQLite connection.

    Mutations run inside the connection's implicit transaction and become
    durable on :meth:`save`. Listeners are notified after each save so that
    views can re-query.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        self._listeners: List[Listener] = []

    @property
    def has_changes(self) -> bool:
        return self._conn.in_transaction

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------
    def categories(self) -> List[Category]:
        cur = self._conn.execute(
            "SELECT id, name, debcred FROM categories ORDER BY name COLLATE NOCASE, id"
        )
        return [category_from_row(row) for row in cur.fetchall()]

    def category(self, category_id: int) -> Optional[Category]:
        cur = self._conn.execute(
            "SELECT id, name, debcred FROM categories WHERE id=?", (category_id,)
        )
        row = cur.fetchone()
        return category_from_row(row) if row else None

    def save_category(self, category: Category) -> Category:
        if category.id is None:
            cur = self._conn.execute(
                "INSERT INTO categories (name, debcred) VALUES (?, ?)",
                (category.name, category.debcred.value),
            )
            return category.with_id(int(cur.lastrowid))
        self._conn.execute(
            "UPDATE categories SET name=?, debcred=? WHERE id=?",
            (category.name, category.debcred.value, category.id),
        )
        return category

    def delete_category(self, category_id: int) -> None:
        self._conn.execute("DELETE FROM categories WHERE id=?", (category_id,))

    # ------------------------------------------------------------------
    # Budgets
    # ------------------------------------------------------------------
    def budgets(self, category_id: int) -> List[Budget]:
        cur = self._conn.execute(
            """
            SELECT id, category_id, description, amount, periodicite, complement
            FROM budgets
            WHERE category_id=?
            ORDER BY description COLLATE NOCASE, id
            """,
            (category_id,),
        )
        return [budget_from_row(row) for row in cur.fetchall()]

    def budget(self, budget_id: int) -> Optional[Budget]:
        cur = self._conn.execute(
            """
            SELECT id, category_id, description, amount, periodicite, complement
            FROM budgets
            WHERE id=?
            """,
            (budget_id,),
        )
        row = cur.fetchone()
        return budget_from_row(row) if row else None

    def save_budget(self, budget: Budget) -> Budget:
        values = (
            budget.category_id,
            budget.description,
            str(budget.amount),
            budget.periodicite.value,
            budget.complement,
        )
        if budget.id is None:
            cur = self._conn.execute(
                """
                INSERT INTO budgets (category_id, description, amount, periodicite, complement)
                VALUES (?, ?, ?, ?, ?)
                """,
                values,
            )
            return budget.with_id(int(cur.lastrowid))
        self._conn.execute(
            """
            UPDATE budgets
            SET category_id=?, description=?, amount=?, periodicite=?, complement=?
            WHERE id=?
            """,
            (*values, budget.id),
        )
        return budget

    def delete_budget(self, budget_id: int) -> None:
        self._conn.execute("DELETE FROM budgets WHERE id=?", (budget_id,))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def operations(
        self,
        month_key: Optional[str] = None,
        kind: Optional[OperationKind] = None,
    ) -> List[Operation]:
        clauses: List[str] = []
        params: List[Any] = []
        if month_key:
            clauses.append("month_key=?")
            params.append(month_key)
        if kind is not None:
            clauses.append("kind=?")
            params.append(OperationKind.parse(kind).value)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        cur = self._conn.execute(
            f"""
            SELECT id, uid, date, amount, kind, title, is_manual, month_key
            FROM operations
            {where}
            ORDER BY date, id
            """,
            params,
        )
        return [operation_from_row(row) for row in cur.fetchall()]

    def insert_operation(self, operation: Operation) -> Operation:
        cur = self._conn.execute(
            """
            INSERT INTO operations (uid, date, amount, kind, title, is_manual, month_key)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                operation.uid,
                operation.date.isoformat(),
                str(operation.amount),
                operation.kind.value,
                operation.title,
                1 if operation.is_manual else 0,
                operation.month_key,
            ),
        )
        return operation.with_id(int(cur.lastrowid))

    def delete_operation(self, operation_id: int) -> None:
        self._conn.execute("DELETE FROM operations WHERE id=?", (operation_id,))

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------
    def count(self, entity: EntityName) -> int:
        table = _TABLES.get(entity)
        if table is None:
            raise ValueError(f"Unknown entity '{entity}'")
        cur = self._conn.execute(f"SELECT COUNT(*) FROM {table}")
        return int(cur.fetchone()[0])

    def save(self) -> None:
        """Commit pending changes and notify listeners."""
        if not self.has_changes:
            return
        self._conn.commit()
        logger.debug("View context saved")
        self._notify()

    def _notify(self) -> None:
        # Runs after the commit; a failing listener is logged and skipped.
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("View context listener %r failed", listener)

    def rollback(self) -> None:
        """Discard pending changes."""
        if self.has_changes:
            self._conn.rollback()
            logger.debug("View context rolled back")

    def add_listener(self, callback: Listener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)


class PersistentContainer:
    """Owns the SQLite connection and the single view context."""

    def __init__(
        self,
        name: str = "Model",
        *,
        db_path: Optional[Union[str, Path]] = None,
        in_memory: bool = False,
    ) -> None:
        self.name = name
        self.in_memory = in_memory
        self.db_path: Optional[Path] = None if in_memory else Path(db_path or default_db_path())
        self._conn: Optional[sqlite3.Connection] = None
        self._view_context: Optional[DataContext] = None

    @property
    def store_location(self) -> str:
        return ":memory:" if self.in_memory else str(self.db_path)

    def load_persistent_stores(self) -> None:
        """Open the database and apply the schema.

        Raises:
            PersistenceError: When the file cannot be opened or the schema
                cannot be applied.
        """
        if self._conn is not None:
            return
        location = self.store_location
        try:
            if self.db_path is not None:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            # shared() may be first called off the Tk thread; access stays serialised.
            conn = sqlite3.connect(location, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys=ON")
            conn.executescript(SCHEMA_SQL)
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Unresolved error opening store '{location}': {exc}") from exc
        self._conn = conn
        self._view_context = DataContext(conn)
        logger.info("Persistent store '%s' loaded from %s", self.name, location)

    @property
    def view_context(self) -> DataContext:
        if self._view_context is None:
            raise PersistenceError("Persistent stores are not loaded")
        return self._view_context

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        self._view_context = None
        logger.info("Persistent store '%s' closed", self.name)


class PersistenceController:
    """Process-wide owner of the application's persistent store.

    ``shared()`` lazily creates one instance per process; direct construction
    is available for dependency injection and tests (``in_memory=True``).
    """

    _shared: Optional["PersistenceController"] = None
    _shared_lock = threading.Lock()

    def __init__(
        self,
        in_memory: bool = False,
        *,
        db_path: Optional[Union[str, Path]] = None,
        seed: bool = True,
    ) -> None:
        self.container = PersistentContainer("Model", db_path=db_path, in_memory=in_memory)
        self.container.load_persistent_stores()
        if seed:
            self.seed_if_needed()

    @classmethod
    def shared(cls) -> "PersistenceController":
        if cls._shared is None:
            with cls._shared_lock:
                if cls._shared is None:
                    cls._shared = cls()
        return cls._shared

    @classmethod
    def reset_shared(cls) -> None:
        """Close and forget the shared instance (tests)."""
        with cls._shared_lock:
            if cls._shared is not None:
                cls._shared.close()
            cls._shared = None

    @classmethod
    def preview(cls) -> "PersistenceController":
        """In-memory controller with sample categories for UI previews."""
        controller = cls(in_memory=True, seed=False)
        ctx = controller.view_context
        for i in range(1, 6):
            debcred = DebCred.DEBIT if i % 2 == 0 else DebCred.CREDIT
            ctx.save_category(Category(name=f"Category {i}", debcred=debcred))
        ctx.save()
        return controller

    @property
    def view_context(self) -> DataContext:
        return self.container.view_context

    def seed_if_needed(self) -> bool:
        """Insert default categories and budgets into an empty store.

        Returns:
            ``True`` when seed rows were written.
        """
        ctx = self.view_context
        try:
            if ctx.count("category") > 0:
                return False
            ids: Dict[str, int] = {}
            for name, debcred in SEED_CATEGORIES:
                saved = ctx.save_category(Category(name=name, debcred=debcred))
                ids[name] = int(saved.id)  # type: ignore[arg-type]
            for category, description, amount, periodicite in SEED_BUDGETS:
                ctx.save_budget(
                    Budget(
                        category_id=ids[category],
                        description=description,
                        amount=amount,
                        periodicite=periodicite,
                    )
                )
            ctx.save()
        except sqlite3.Error as exc:
            ctx.rollback()
            raise PersistenceError(f"Failed to seed data: {exc}") from exc
        logger.info("Seeded %d categories and %d budgets", len(SEED_CATEGORIES), len(SEED_BUDGETS))
        return True

    def close(self) -> None:
        self.container.close()


__all__ = [
    "DataContext",
    "PersistenceController",
    "PersistenceError",
    "PersistentContainer",
    "SCHEMA_SQL",
    "budget_from_row",
    "category_from_row",
    "operation_from_row",
]
