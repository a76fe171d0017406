from __future__ import annotations
import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from finz.domain.ports import StoragePort
from finz.utils.storage_paths import SETTINGS_FILENAME

logger = logging.getLogger(__name__)


class StorageLocal(StoragePort):
    """Local filesystem storage for user settings (JSON)."""

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, SETTINGS_FILENAME)

    # ---- User settings (JSON) ----
    def save_user_settings(self, payload: Mapping[str, Any]) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.settings_path, "w", encoding="utf-8") as f:
            json.dump(dict(payload), f, ensure_ascii=False, indent=2)

    def load_user_settings(self) -> Optional[Dict[str, Any]]:
        """Return the persisted payload, or ``None`` when missing or unreadable."""
        path = self.settings_path
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: expected a JSON object", path)
            return None
        return data
