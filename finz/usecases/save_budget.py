from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from ..domain.entities import Budget, Periodicite
from ..domain.money import parse_amount
from ..domain.ports import DataContextPort, UseCaseError
from .error_mapping import map_persistence_error

log = logging.getLogger(__name__)


@dataclass
class SaveBudget:
    context: DataContextPort

    def __call__(
        self,
        category_id: int,
        description: str,
        amount_text: str,
        periodicite: Periodicite | str = Periodicite.MENSUEL,
        complement: str = "",
        budget_id: Optional[int] = None,
    ) -> Budget:
        clean_description = (description or "").strip()
        if not clean_description:
            raise UseCaseError("BUDGET_DESCRIPTION_REQUIRED", "Description is required.")
        amount = parse_amount(amount_text)
        if amount is None:
            raise UseCaseError("INVALID_AMOUNT", "Montant invalide")
        budget = Budget(
            id=budget_id,
            category_id=category_id,
            description=clean_description,
            amount=amount,
            periodicite=Periodicite.parse(periodicite),
            complement=(complement or "").strip(),
        )
        try:
            saved = self.context.save_budget(budget)
            self.context.save()
        except Exception as e:
            self.context.rollback()
            raise map_persistence_error(e, default_code="SAVE_BUDGET_FAILED")
        log.info("Saved budget '%s' for category %s", saved.description, category_id)
        return saved
