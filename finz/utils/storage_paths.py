from __future__ import annotations

import os
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

DB_FILENAME = "finz.sqlite3"
SETTINGS_FILENAME = "user_settings.json"

_PATH_SEGMENT_RE = re.compile(r"[^0-9A-Za-z_-]+")


def _value_or_none(value: Optional[str]) -> Optional[str]:
    """Return a trimmed string or None when the input is empty."""
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed if trimmed else None


def storage_root() -> Path:
    """Directory holding the database and the settings file (``FINZ_STORAGE_ROOT``)."""
    return Path(_value_or_none(os.environ.get("FINZ_STORAGE_ROOT")) or ".")


def default_db_path() -> Path:
    """Database file: ``FINZ_DB_PATH`` wins over ``<storage root>/finz.sqlite3``."""
    explicit = _value_or_none(os.environ.get("FINZ_DB_PATH"))
    if explicit:
        return Path(explicit)
    return storage_root() / DB_FILENAME


def sanitize_path_segment(raw: Optional[str]) -> Optional[str]:
    """Sanitize a path segment to keep only safe characters for local storage."""
    candidate = _value_or_none(raw)
    if candidate is None:
        return None
    sanitized = _PATH_SEGMENT_RE.sub("_", candidate)
    sanitized = re.sub(r"_+", "_", sanitized)
    sanitized = sanitized.strip("_-")
    return sanitized or None


def export_filename(prefix: str = "operations", *, now: Optional[datetime] = None) -> str:
    """Timestamped CSV file name, e.g. ``operations_2024-05-01_12-30-00.csv``."""
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    safe_prefix = sanitize_path_segment(prefix) or "operations"
    return f"{safe_prefix}_{stamp}.csv"


__all__ = [
    "DB_FILENAME",
    "SETTINGS_FILENAME",
    "default_db_path",
    "export_filename",
    "sanitize_path_segment",
    "storage_root",
]
