"""Record a manual income or expense entered from the quick add sheet."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date

from ..domain.entities import TITLE_SEPARATOR, Operation, OperationKind
from ..domain.money import clamp_day, parse_amount
from ..domain.ports import DataContextPort, UseCaseError
from .error_mapping import map_persistence_error

log = logging.getLogger(__name__)


@dataclass
class AddOperation:
    context: DataContextPort

    def __call__(
        self,
        kind: OperationKind | str,
        amount_text: str,
        year: int,
        month: int,
        day: int,
        category: str,
        description: str = "",
    ) -> Operation:
        kind = OperationKind.parse(kind)
        amount = parse_amount(amount_text)
        if amount is None or amount <= 0:
            raise UseCaseError("INVALID_AMOUNT", "Montant invalide")
        title_base = (category or "").strip()
        if not title_base:
            raise UseCaseError("CATEGORY_REQUIRED", "Catégorie requise")
        try:
            day = clamp_day(int(year), int(month), int(day))
            when = date(int(year), int(month), day)
        except (TypeError, ValueError):
            raise UseCaseError("INVALID_DATE", "Date invalide")

        desc = (description or "").strip()
        operation = Operation(
            date=when,
            amount=amount if kind is OperationKind.INCOME else -amount,
            kind=kind,
            title=f"{title_base}{TITLE_SEPARATOR}{desc}" if desc else title_base,
            is_manual=True,
        )
        try:
            saved = self.context.insert_operation(operation)
            self.context.save()
        except Exception as e:
            self.context.rollback()
            raise map_persistence_error(
                e,
                default_code="SAVE_OPERATION_FAILED",
                default_message=f"Erreur lors de la sauvegarde : {e}",
            )
        log.info("Added %s operation %s on %s", kind.value, saved.amount, saved.date.isoformat())
        return saved
