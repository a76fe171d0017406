from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..domain.ports import DataContextPort
from .error_mapping import map_persistence_error
from .monthly_statistics import operations_frame

log = logging.getLogger(__name__)

EXPORT_COLUMNS = ["date", "kind", "title", "amount", "month_key", "is_manual"]


@dataclass
class ExportOperations:
    """Write every operation to a CSV file and return its path."""

    context: DataContextPort

    def __call__(self, target_path: Union[str, Path]) -> Path:
        path = Path(target_path)
        try:
            frame = operations_frame(self.context.operations())
            path.parent.mkdir(parents=True, exist_ok=True)
            frame[EXPORT_COLUMNS].to_csv(path, index=False, encoding="utf-8", float_format="%.2f")
        except Exception as e:
            raise map_persistence_error(e, default_code="EXPORT_FAILED")
        log.info("Exported %d operations to %s", len(frame), path)
        return path
